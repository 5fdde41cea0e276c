import pytest

from unitscan import find_units_in_string
from unitscan.config import ExtractorSettings
from unitscan.extraction.descriptors import RawUnit
from unitscan.extraction.engine import UnitExtractor
from unitscan.extraction.interpreters import PintInterpreter, StaticInterpreter, UcumTableInterpreter


@pytest.fixture()
def extractor(pint_registry) -> UnitExtractor:
    return UnitExtractor(
        primary_factory=lambda: PintInterpreter(pint_registry),
        secondary_factory=UcumTableInterpreter,
    )


@pytest.mark.parametrize("text", [None, "", "   ", "no numbers here", "42"])
def test_text_without_pairs_gives_empty_result(extractor: UnitExtractor, text) -> None:
    assert len(extractor.find_units(text)) == 0


def test_milligram_dose(extractor: UnitExtractor) -> None:
    results = list(extractor.find_units("Give 120 mg of drug"))
    assert len(results) == 1
    (descriptor,) = results
    assert descriptor.value == "120"
    assert descriptor.raw_unit_text == "mg"
    assert descriptor.canonical_name == "mg"
    assert descriptor.dimension == "M"


def test_capital_h_means_hour(extractor: UnitExtractor) -> None:
    (descriptor,) = extractor.find_units("Wait 2 H before dosing")
    assert descriptor.value == "2"
    assert descriptor.raw_unit_text == "h"
    assert descriptor.canonical_name == "h"
    assert descriptor.dimension == "T"


@pytest.mark.parametrize("text", ["5 a", "take 5 A now", "300 K", "45 %"])
def test_ambiguous_units_are_dropped(extractor: UnitExtractor, text: str) -> None:
    assert len(extractor.find_units(text)) == 0


def test_glued_pressure_reading(extractor: UnitExtractor) -> None:
    (descriptor,) = extractor.find_units("BP 120mmHg")
    assert descriptor.value == "120"
    assert descriptor.raw_unit_text == "mmHg"
    assert descriptor.dimension == "L-1.M.T-2"


@pytest.mark.parametrize(
    "text, value, unit",
    [
        ("Give 5 mL", "5", "mL"),
        ("Infuse 3 L", "3", "L"),
        ("Draw 5 cc", "5", "cc"),
        ("Glucose 10 mg/dL", "10", "mg/dL"),
    ],
)
def test_agreeing_engines_give_one_row(extractor: UnitExtractor, text: str, value: str, unit: str) -> None:
    results = list(extractor.find_units(text))
    assert [(item.value, item.raw_unit_text) for item in results] == [(value, unit)]


def test_blood_pressure_fraction_has_no_separator_unit(extractor: UnitExtractor) -> None:
    results = list(extractor.find_units("BP 120/80 mmHg"))
    assert [(item.value, item.raw_unit_text) for item in results] == [("80", "mmHg")]


@pytest.mark.parametrize("text", ["take 1/2 tab", "dose 5 . daily"])
def test_bare_separators_are_not_units(extractor: UnitExtractor, text: str) -> None:
    assert all(item.raw_unit_text not in {"/", "."} for item in extractor.find_units(text))


def test_nan_value_pairs_with_unit() -> None:
    extractor = UnitExtractor(primary_factory=UcumTableInterpreter, secondary_factory=None)
    assert [(item.value, item.raw_unit_text) for item in extractor.find_units("level NaN mg")] == [("NaN", "mg")]


def test_repeated_calls_are_equal(extractor: UnitExtractor) -> None:
    text = "Give 120 mg of drug every 8 h and max 2 g per day"
    first = extractor.find_units(text)
    second = extractor.find_units(text)
    assert first == second
    assert {(item.value, item.raw_unit_text) for item in first} >= {("120", "mg"), ("8", "h"), ("2", "g")}


def test_fresh_interpreters_per_call() -> None:
    built = []

    def factory():
        interpreter = StaticInterpreter({"mg": RawUnit(canonical_name="mg", dimension="M", system_units="kg")})
        built.append(interpreter)
        return interpreter

    extractor = UnitExtractor(primary_factory=factory, secondary_factory=None)
    extractor.find_units("5 mg")
    extractor.find_units("6 mg")
    assert len(built) == 2
    assert [interpreter.calls for interpreter in built] == [["mg"], ["mg"]]


def test_secondary_only_answer_is_kept() -> None:
    extractor = UnitExtractor(primary_factory=lambda: StaticInterpreter({}), secondary_factory=UcumTableInterpreter)
    (descriptor,) = extractor.find_units("10 mg/dL")
    assert descriptor.canonical_name == "mg/dL"
    assert descriptor.dimension == "L-3.M"


def test_from_settings_honours_disabled_secondary() -> None:
    settings = ExtractorSettings(primary_interpreter="ucum", secondary_interpreter=None)
    extractor = UnitExtractor.from_settings(settings)
    (descriptor,) = extractor.find_units("5 mg")
    assert descriptor.system_units == "kg"


def test_from_settings_rejects_unknown_interpreter() -> None:
    with pytest.raises(KeyError):
        UnitExtractor.from_settings(ExtractorSettings(primary_interpreter="jscience"))


def test_find_units_in_string_default_pipeline() -> None:
    results = find_units_in_string("Give 120 mg of drug")
    assert [(item.value, item.canonical_name) for item in results] == [("120", "mg")]
