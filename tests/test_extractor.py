import pytest

from cardmatch.extractor import CardDataExtractor, extract_card_data
from cardmatch.models.card import ExtractedCardData
from cardmatch.vocabulary import ExtractionVocabulary, KeywordGroup


# ---------- Scenarios ----------

def test_topps_trout_title():
    data = extract_card_data("2024 Topps Mike Trout Baseball Card #27")

    assert data.year == 2024
    assert data.brand == "topps"
    assert data.player_name == "Mike Trout"
    assert data.card_number == "27"
    assert data.sport == "baseball"
    assert data.series is None
    assert data.is_rookie is False
    assert data.grade is None


def test_prizm_is_a_brand_not_a_series():
    data = extract_card_data("2020 Panini Prizm LeBron James Auto /99")

    assert data.year == 2020
    assert data.brand == "panini"
    assert data.series is None
    assert data.is_autograph is True
    assert data.card_number is None


def test_empty_title_extracts_nothing():
    assert extract_card_data("") == ExtractedCardData()


# ---------- Year ----------

@pytest.mark.parametrize(
    "title,expected",
    [
        ("1952 Topps Mickey Mantle", 1952),
        ("1949 Bowman Jackie Robinson", None),
        ("2039 Topps Future Star", 2039),
        ("2040 Topps Future Star", None),
        ("Topps Baseball Card", None),
    ],
)
def test_year_range(title, expected):
    assert extract_card_data(title).year == expected


# ---------- Brand and series ----------

@pytest.mark.parametrize(
    "title,brand,series",
    [
        ("2019 Topps Stadium Club Pete Alonso", "topps", "stadium club"),
        ("2021 Bowman Chrome Bobby Witt", "bowman", "chrome"),
        ("2020 Donruss Optic Joe Burrow", "donruss", None),
        ("2022 Panini Donruss Rated Rookie", "panini", None),
        ("2015 Upper Deck The Cup Connor McDavid", "upper deck", "the cup"),
    ],
)
def test_brand_and_series_follow_priority_order(title, brand, series):
    data = extract_card_data(title)
    assert data.brand == brand
    assert data.series == series


# ---------- Card number cascade ----------

@pytest.mark.parametrize(
    "title,expected",
    [
        ("1989 Fleer Card 45 Football", "45"),
        ("1990 Score Barry Sanders No. 12", "12"),
        ("1990 Score Barry Sanders no12", "12"),
        ("Casino 7 Poker Chip", "7"),
        ("2021 Donruss Optic Justin Herbert Gold 15/99", "15"),
        ("2023 Topps #7 Refractor 15/99", "7"),
        ("2023 Topps Chrome Refractor", None),
    ],
)
def test_card_number_first_pattern_wins(title, expected):
    assert extract_card_data(title).card_number == expected


# ---------- Player name cascade ----------

def test_player_name_before_year():
    data = extract_card_data("Mike Trout 2011 Topps #175 RC")

    assert data.player_name == "Mike Trout"
    assert data.year == 2011
    assert data.card_number == "175"
    assert data.is_rookie is True


def test_excluded_phrase_falls_through_to_next_pattern():
    # "<year> <brand> Rookie Card" is card jargon, the name-before-year pattern wins
    data = extract_card_data("Mike Trout 2011 Topps Rookie Card")
    assert data.player_name == "Mike Trout"


def test_only_excluded_phrases_yield_no_player():
    extractor = CardDataExtractor()
    assert extractor.extract_player_name("Upper Deck Wayne Gretzky 1990", 1990, "upper deck") is None


def test_year_brand_pattern_needs_both_year_and_brand():
    extractor = CardDataExtractor()
    name = extractor.extract_player_name("Shohei Ohtani Rookie", None, None)
    assert name == "Shohei Ohtani"


def test_mixed_case_surname_is_captured():
    data = extract_card_data("2018 Upper Deck Connor McDavid Young Guns")
    assert data.player_name == "Connor McDavid"


def test_no_capitalised_words_means_no_player():
    assert extract_card_data("topps baseball card lot").player_name is None


# ---------- Flags, sport and grading ----------

def test_flags_are_independent():
    data = extract_card_data("2018 Panini National Treasures RC Auto Game-Used Patch")

    assert data.is_rookie is True
    assert data.is_autograph is True
    assert data.is_relic is True
    assert data.series == "national treasures"


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Signed Jersey Card", True),
        ("Game Used Bat Relic", True),
        ("Autograph Only", False),
    ],
)
def test_relic_flag(title, expected):
    assert extract_card_data(title).is_relic is expected


def test_rookie_needs_whole_word():
    assert extract_card_data("2024 Topps Search Party").is_rookie is False


@pytest.mark.parametrize(
    "title,sport",
    [
        ("2023 Topps MLS Lionel Messi", "soccer"),
        ("NHL Upper Deck Young Guns", "hockey"),
        ("NBA Hoops Victor Wembanyama", "basketball"),
        ("Baseball and Football combo", "baseball"),
    ],
)
def test_sport_first_match_wins(title, sport):
    assert extract_card_data(title).sport == sport


@pytest.mark.parametrize(
    "title,company,grade",
    [
        ("2018 Panini Prizm Luka Doncic RC BGS 9.5", "BGS", 9.5),
        ("1986 Fleer Michael Jordan psa 10", "PSA", 10.0),
        ("2020 Topps Chrome SGC 8 Luis Robert", "SGC", 8.0),
        ("2020 Topps Chrome Luis Robert", None, None),
    ],
)
def test_grading(title, company, grade):
    data = extract_card_data(title)
    assert data.grading_company == company
    assert data.grade == grade


# ---------- Properties ----------

def test_extraction_is_deterministic():
    extractor = CardDataExtractor()
    title = "2018 Panini Prizm Luka Doncic RC Silver #280 PSA 10"
    assert extractor.extract(title) == extractor.extract(title)


def test_alternate_vocabulary_is_used():
    vocabulary = ExtractionVocabulary(
        brands=("futera",),
        series=("unique",),
        sport_groups=(KeywordGroup(label="soccer", terms=("futbol",)),),
        player_name_exclusions=(),
    )
    data = CardDataExtractor(vocabulary=vocabulary).extract(
        "2019 Futera Unique Lionel Messi futbol"
    )

    assert data.brand == "futera"
    assert data.series == "unique"
    assert data.sport == "soccer"
