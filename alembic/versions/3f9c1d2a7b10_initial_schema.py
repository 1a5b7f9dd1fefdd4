"""Initial schema

Revision ID: 3f9c1d2a7b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1d2a7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'recipes',
        sa.Column('recipe_id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('serving_size', sa.String(), nullable=True),
        sa.Column('servings', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('recipe_id'),
    )
    op.create_index(op.f('ix_recipes_name'), 'recipes', ['name'], unique=False)

    op.create_table(
        'ingredients',
        sa.Column('ingredient_id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('ingredient_name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('ingredient_id'),
    )
    op.create_index(op.f('ix_ingredients_ingredient_name'), 'ingredients', ['ingredient_name'], unique=False)

    op.create_table(
        'tags',
        sa.Column('tag_name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('tag_name'),
    )
    op.create_table(
        'search_terms',
        sa.Column('search_term', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('search_term'),
    )

    op.create_table(
        'recipe_ingredients',
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('ingredient_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.recipe_id']),
        sa.ForeignKeyConstraint(['ingredient_id'], ['ingredients.ingredient_id']),
        sa.PrimaryKeyConstraint('recipe_id', 'ingredient_id'),
    )
    op.create_index(op.f('ix_recipe_ingredients_ingredient_id'), 'recipe_ingredients', ['ingredient_id'], unique=False)

    op.create_table(
        'steps',
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('step_number', sa.Integer(), nullable=False),
        sa.Column('step_description', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.recipe_id']),
        sa.PrimaryKeyConstraint('recipe_id', 'step_number'),
    )

    op.create_table(
        'recipe_tags',
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('tag_name', sa.String(), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.recipe_id']),
        sa.ForeignKeyConstraint(['tag_name'], ['tags.tag_name']),
        sa.PrimaryKeyConstraint('recipe_id', 'tag_name'),
    )
    op.create_index(op.f('ix_recipe_tags_tag_name'), 'recipe_tags', ['tag_name'], unique=False)

    op.create_table(
        'recipe_search_terms',
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('search_term', sa.String(), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.recipe_id']),
        sa.ForeignKeyConstraint(['search_term'], ['search_terms.search_term']),
        sa.PrimaryKeyConstraint('recipe_id', 'search_term'),
    )
    op.create_index(op.f('ix_recipe_search_terms_search_term'), 'recipe_search_terms', ['search_term'], unique=False)

    op.create_table(
        'favorites',
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.recipe_id']),
        sa.PrimaryKeyConstraint('recipe_id'),
    )

    op.create_table(
        'meal_planner',
        sa.Column('day', sa.String(), nullable=False),
        sa.Column('meal_type', sa.String(), nullable=False),
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['recipe_id'], ['recipes.recipe_id']),
        sa.PrimaryKeyConstraint('day', 'meal_type'),
    )
    op.create_index(op.f('ix_meal_planner_recipe_id'), 'meal_planner', ['recipe_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_meal_planner_recipe_id'), table_name='meal_planner')
    op.drop_table('meal_planner')
    op.drop_table('favorites')
    op.drop_index(op.f('ix_recipe_search_terms_search_term'), table_name='recipe_search_terms')
    op.drop_table('recipe_search_terms')
    op.drop_index(op.f('ix_recipe_tags_tag_name'), table_name='recipe_tags')
    op.drop_table('recipe_tags')
    op.drop_table('steps')
    op.drop_index(op.f('ix_recipe_ingredients_ingredient_id'), table_name='recipe_ingredients')
    op.drop_table('recipe_ingredients')
    op.drop_table('search_terms')
    op.drop_table('tags')
    op.drop_index(op.f('ix_ingredients_ingredient_name'), table_name='ingredients')
    op.drop_table('ingredients')
    op.drop_index(op.f('ix_recipes_name'), table_name='recipes')
    op.drop_table('recipes')
