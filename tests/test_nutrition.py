from nutrition import format_nutrient, nutrition_facts, nutrition_grade, split_list


def test_grade_is_case_insensitive():
    grade = nutrition_grade(" B ")
    assert grade.grade == "b"
    assert grade.description == "Good nutritional quality"


def test_missing_grade():
    assert nutrition_grade(None) is None
    assert nutrition_grade("not-applicable") is None


def test_format_nutrient():
    assert format_nutrient(3.14159) == "3.1 g"
    assert format_nutrient(1000, "kJ") == "1000.0 kJ"
    assert format_nutrient(None) == "N/A"


def test_facts_ignore_unparseable_values():
    facts = nutrition_facts({"salt_100g": "", "saturated-fat_100g": 10.6})
    by_key = {f.key: f for f in facts}
    assert by_key["salt_100g"].display == "N/A"
    assert by_key["saturated-fat_100g"].display == "10.6 g"
    assert len(facts) == 8


def test_split_list():
    assert split_list("a, b,,c ") == ["a", "b", "c"]
    assert split_list(None) == []
    assert split_list(["a"]) == []
