from relped.graph import PedigreeGraph
from relped.models import Individual, Sex


def test_sex_codes():
    assert Sex.from_code("m") is Sex.MALE
    assert Sex.from_code(" Female ") is Sex.FEMALE
    assert Sex.from_code("unknown") is Sex.UNKNOWN
    assert Sex.from_code("?") is None
    assert Sex.from_code(None) is None
    assert str(Sex.FEMALE) == "Female"


def test_individual_parents():
    assert Individual(name="C", dam="D", sire="S").parents() == ["D", "S"]
    assert Individual(name="C", sire="S").parents() == ["S"]
    assert Individual(name="C").sex is Sex.UNKNOWN


def test_add_info_copies_record():
    g = PedigreeGraph(["A"])
    rec = Individual(name="ignored", age=3, sex=Sex.FEMALE)
    g.add_info("A", rec)
    info = g.info("A")
    assert info.name == "A" and info.age == 3
    info.age = 99
    assert g.info("A").age == 3
