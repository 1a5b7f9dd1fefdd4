from mealprep.filters import MAX_OFFSET, RecipeFilters, SortOption, page_offset


def test_sort_option_parse():
    assert SortOption.parse("alphabetical") is SortOption.ALPHABETICAL
    assert SortOption.parse("servings") is SortOption.SERVINGS
    assert SortOption.parse("calories") is None
    assert SortOption.parse("") is None
    assert SortOption.parse(None) is None


def test_recipe_filters_blank_values_mean_no_filter():
    filters = RecipeFilters(tag="", search_term="   ", ingredient=None)
    assert filters.tag is None
    assert filters.search_term is None
    assert filters.ingredient is None
    assert filters.model_dump() == {"tag": None, "search_term": None, "ingredient": None}


def test_recipe_filters_strip_values():
    filters = RecipeFilters(tag=" vegetarian ", ingredient="garlic")
    assert filters.tag == "vegetarian"
    assert filters.ingredient == "garlic"
    assert filters.search_term is None


def test_page_offset():
    assert page_offset(1, 10) == 0
    assert page_offset(2, 10) == 10
    assert page_offset(3, 25) == 50
    assert page_offset(0, 10) == 0
    assert page_offset(-4, 10) == 0


def test_page_offset_is_capped():
    assert page_offset(10**20, 10) == MAX_OFFSET
    assert page_offset(MAX_OFFSET, 1) == MAX_OFFSET - 1
