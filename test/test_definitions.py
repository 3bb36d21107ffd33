import pytest

from mensura import F, InvalidTypeError
from mensura import definitions


def test_table():
    assert len(definitions.ordinalTypeFromNum) == 15
    assert definitions.ordinalTypeFromNum[definitions.quarterTypeIndex] == 'quarter'
    assert len(definitions.vexflowDurationArray) == len(definitions.ordinalTypeFromNum)


def test_nominal_quarter_length():
    assert definitions.nominalQuarterLength(definitions.quarterTypeIndex) == 1
    assert definitions.nominalQuarterLength(0) == 64
    assert definitions.nominalQuarterLength(14) == F(1, 256)
    with pytest.raises(IndexError):
        definitions.nominalQuarterLength(15)


def test_type_to_quarter_length():
    assert definitions.typeToQuarterLength('breve') == 8
    assert definitions.typeToQuarterLength('32nd') == F(1, 8)
    assert definitions.typeToQuarterLength('zero') == 0


def test_dotted_multiplier():
    assert [definitions.dottedMultiplier(n) for n in range(5)] == \
        [1, F(3, 2), F(7, 4), F(15, 8), F(31, 16)]
    with pytest.raises(ValueError):
        definitions.dottedMultiplier(-1)


def test_type_index():
    assert definitions.typeIndex('duplex-maxima') == 0
    assert definitions.typeIndex('1024th') == 14
    with pytest.raises(InvalidTypeError):
        definitions.typeIndex('semibreve')
    assert definitions.isValidType('zero')
    assert not definitions.isValidType('semibreve')


def test_type_from_number():
    assert definitions.typeFromNumber(4) == 'quarter'
    assert definitions.typeFromNumber(0) == 'zero'
    assert definitions.typeFromNumber(F(1, 2)) == 'breve'
    assert definitions.typeFromNumber(0.0625) == 'duplex-maxima'
    with pytest.raises(InvalidTypeError):
        definitions.typeFromNumber(3)
    assert definitions.typeToNumber('eighth') == 8
    assert definitions.typeToNumber('longa') == F(1, 4)
    with pytest.raises(InvalidTypeError):
        definitions.typeToNumber('crotchet')
