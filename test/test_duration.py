import copy
import logging

import pytest

from mensura import Duration, Tuplet, F, config
from mensura import InvalidTypeError, ImmutableTupletError
from mensura import definitions
from mensura.common import getLogger


@pytest.fixture
def inexpressibleLog(caplog):
    logger = getLogger('mensura')
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.WARNING, logger='mensura')
    yield caplog
    logger.removeHandler(caplog.handler)


def test_duration_from_quarter_length():
    d = Duration(1.0)
    assert d.type == 'quarter'
    assert d.dots == 0
    assert d.quarterLength == 1
    assert d.vexflowDuration == 'q'


def test_default_duration_is_a_quarter():
    d = Duration()
    assert d.type == 'quarter'
    assert d.quarterLength == 1


def test_set_type():
    d = Duration(1.0)
    d.type = 'half'
    assert d.type == 'half'
    assert d.dots == 0
    assert d.quarterLength == 2
    assert d.vexflowDuration == 'h'


def test_set_quarter_length_dotted():
    d = Duration()
    d.quarterLength = 6.0
    assert d.type == 'whole'
    assert d.dots == 1
    assert d.quarterLength == 6
    assert d.vexflowDuration == 'wd'

    d.quarterLength = 7.75
    assert d.type == 'whole'
    assert d.dots == 4
    assert d.quarterLength == F(31, 4)


def test_quarter_length_none_means_one():
    d = Duration(3)
    d.quarterLength = None
    assert d.type == 'quarter'
    assert d.quarterLength == 1


def test_type_keeps_dots():
    d = Duration(2)
    d.dots = 1
    assert d.quarterLength == 3
    d.type = 'quarter'
    assert d.dots == 1
    assert d.quarterLength == F(3, 2)


def test_duration_from_type_name():
    d = Duration('breve')
    assert d.quarterLength == 8
    assert d.dots == 0
    assert d.vexflowDuration is None


def test_invalid_type_leaves_duration_untouched():
    d = Duration(1.5)
    with pytest.raises(InvalidTypeError):
        d.type = 'semiquaver'
    assert d.type == 'quarter'
    assert d.dots == 1
    assert d.quarterLength == F(3, 2)


def test_invalid_type_is_a_value_error():
    with pytest.raises(ValueError):
        Duration('crotchet')


def test_invalid_dots():
    d = Duration(1)
    with pytest.raises(ValueError):
        d.dots = -1
    with pytest.raises(ValueError):
        d.dots = 1.5
    assert d.dots == 0
    assert d.quarterLength == 1


def test_invalid_quarter_length():
    with pytest.raises(ValueError):
        Duration(-1)
    with pytest.raises(TypeError):
        Duration([1])
    d = Duration(2)
    with pytest.raises(TypeError):
        d.quarterLength = '2'
    assert d.quarterLength == 2


@pytest.mark.parametrize('typename', definitions.ordinalTypeFromNum)
def test_type_and_dots_survive_conversion_to_quarter_length(typename):
    for dots in range(5):
        d = Duration(typename)
        d.dots = dots
        d2 = Duration(d.quarterLength)
        assert (d2.type, d2.dots) == (typename, dots)
        assert not d2.tuplets


def test_triplet_is_inferred():
    d = Duration(1/3)
    assert d.type == 'eighth'
    assert d.dots == 0
    assert d.quarterLength == F(1, 3)
    assert len(d.tuplets) == 1
    t = d.tuplets[0]
    assert t.numberNotesActual == 3
    assert t.numberNotesNormal == 2
    assert t.durationActual.quarterLength == 0.5
    assert t.tupletMultiplier() == F(2, 3)
    assert t.totalTupletLength() == 1
    assert t.frozen


def test_quarter_note_triplet_is_inferred():
    d = Duration(2/3)
    assert d.type == 'quarter'
    assert d.tuplets[0].ratio == F(3, 2)
    assert d.tuplets[0].durationActual.type == 'quarter'
    assert d.quarterLength == F(2, 3)


def test_quintuplet_is_inferred():
    d = Duration(0.4)
    assert d.type == 'eighth'
    assert (d.tuplets[0].numberNotesActual, d.tuplets[0].numberNotesNormal) == (5, 4)
    assert d.fullName == 'Eighth Quintuplet (2/5 QL)'


def test_inferred_tuplet_keeps_the_invariant():
    for ql in (F(1, 3), F(2, 5), F(1, 6), F(4, 7), F(3, 10)):
        d = Duration(ql)
        nominal = definitions.typeToQuarterLength(d.type)
        expected = nominal * definitions.dottedMultiplier(d.dots) * d.tupletMultiplier()
        assert expected == ql
        assert not d.inexpressible


def test_setting_quarter_length_discards_tuplets():
    d = Duration(1/3)
    d.quarterLength = 1
    assert d.tuplets == ()
    assert d.type == 'quarter'


def test_setting_type_keeps_tuplets():
    d = Duration(1/3)
    d.type = 'quarter'
    assert len(d.tuplets) == 1
    assert d.quarterLength == F(2, 3)


def test_append_tuplet():
    d = Duration(0.5)
    t = Tuplet(5, 4)
    assert t.tupletMultiplier() == F(4, 5)
    d.appendTuplet(t)
    assert t.frozen
    assert d.tuplets[0] is t
    assert d.quarterLength == F(2, 5)
    assert float(d.quarterLength) == pytest.approx(0.4)


def test_append_tuplet_skip_update():
    d = Duration(0.5)
    d.appendTuplet(Tuplet(3, 2), skipUpdateQl=True)
    assert d.quarterLength == F(1, 2)
    assert len(d.tuplets) == 1


def test_append_tuplet_twice_fails():
    t = Tuplet()
    Duration(0.5).appendTuplet(t)
    other = Duration(0.5)
    with pytest.raises(ImmutableTupletError):
        other.appendTuplet(t)
    assert other.tuplets == ()
    assert other.quarterLength == F(1, 2)


def test_append_non_tuplet():
    with pytest.raises(TypeError):
        Duration(1).appendTuplet((3, 2))


def test_nested_tuplets():
    d = Duration('eighth')
    d.appendTuplet(Tuplet(3, 2))
    d.appendTuplet(Tuplet(5, 4))
    assert d.tupletMultiplier() == F(8, 15)
    assert d.quarterLength == F(4, 15)
    assert d.fullName == 'Eighth Triplet Quintuplet (4/15 QL)'


def test_tuplets_are_read_only():
    d = Duration(1/3)
    tuplets = d.tuplets
    assert isinstance(tuplets, tuple)
    assert d.tuplets is not tuplets
    with pytest.raises(AttributeError):
        d.tuplets = []


def test_clone():
    d = Duration(2/3)
    c = d.clone()
    assert c == d
    assert c is not d
    assert c.type == d.type
    assert c.dots == d.dots
    assert c.quarterLength == d.quarterLength
    assert len(c.tuplets) == len(d.tuplets) == 1
    assert c.tuplets[0] is not d.tuplets[0]
    assert c.tuplets[0] == d.tuplets[0]
    assert c.tuplets[0].frozen
    assert c.tuplets[0].durationActual is not d.tuplets[0].durationActual


def test_clone_is_independent():
    d = Duration(1/3)
    c = copy.deepcopy(d)
    c.dots = 1
    assert d.dots == 0
    assert d.quarterLength == F(1, 3)
    assert c.quarterLength == F(1, 2)
    assert copy.copy(d).tuplets[0] is not d.tuplets[0]


def test_frozen_tuplet_durations_are_locked():
    d = Duration(1/3)
    t = d.tuplets[0]
    with pytest.raises(ImmutableTupletError):
        t.durationNormal.type = 'quarter'
    with pytest.raises(ImmutableTupletError):
        t.durationActual.quarterLength = 1
    assert d.quarterLength == F(1, 3)


def test_zero_duration():
    d = Duration(0)
    assert d.type == 'zero'
    assert d.dots == 0
    assert d.tuplets == ()
    assert d.quarterLength == 0
    assert d.vexflowDuration is None
    assert d.fullName == 'Zero Duration'
    assert not d.inexpressible


def test_inexpressible_ratio():
    d = Duration(F(1, 97))
    assert d.inexpressible
    assert d.tuplets == ()
    assert d.quarterLength == F(1, 97)
    assert d.fullName == 'Inexpressible'
    d.type = 'quarter'
    assert not d.inexpressible
    assert d.quarterLength == 1


def test_out_of_range_quarter_lengths(monkeypatch):
    monkeypatch.setitem(config, 'warnInexpressible', False)
    long = Duration(256)
    assert long.inexpressible
    assert long.type == 'duplex-maxima'
    assert long.quarterLength == 256

    short = Duration(F(1, 1024))
    assert short.inexpressible
    assert short.type == '1024th'
    assert short.tuplets == ()
    assert short.quarterLength == F(1, 1024)


@pytest.mark.parametrize('ql, ratio', [
    (F(1, 384), (3, 2)),
    (F(1, 320), (5, 4)),
])
def test_tuplets_of_the_shortest_type(ql, ratio):
    d = Duration(ql)
    assert not d.inexpressible
    assert d.type == '1024th'
    assert d.dots == 0
    t = d.tuplets[0]
    assert (t.numberNotesActual, t.numberNotesNormal) == ratio
    assert t.durationActual.type == '1024th'
    assert d.quarterLength == ql


def test_shortest_type_triplet_reads_back():
    d = Duration('1024th')
    d.appendTuplet(Tuplet(3, 2, '1024th'))
    assert d.quarterLength == F(1, 384)
    d2 = Duration(d.quarterLength)
    assert d2 == d


def test_inexpressible_warning_is_logged(inexpressibleLog):
    Duration(F(1, 97))
    warnings = [r for r in inexpressibleLog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert 'inexpressible' in warnings[0].getMessage()


def test_inexpressible_warning_can_be_disabled(inexpressibleLog, monkeypatch):
    monkeypatch.setitem(config, 'warnInexpressible', False)
    d = Duration(F(1, 97))
    assert d.inexpressible
    assert not [r for r in inexpressibleLog.records if r.levelno == logging.WARNING]


def test_max_dots_is_configurable(monkeypatch):
    monkeypatch.setitem(config, 'maxDots', 1)
    d = Duration(1.75)
    assert d.type == 'half'
    assert d.dots == 0
    assert (d.tuplets[0].numberNotesActual, d.tuplets[0].numberNotesNormal) == (8, 7)
    assert d.quarterLength == F(7, 4)


def test_full_name():
    assert Duration(1).fullName == 'Quarter'
    assert Duration(1.5).fullName == 'Dotted Quarter'
    assert Duration(3.5).fullName == 'Double Dotted Half'
    assert Duration(1/3).fullName == 'Eighth Triplet (1/3 QL)'


def test_vexflow_duration():
    assert Duration(0.25).vexflowDuration == '16'
    d = Duration(2)
    d.dots = 2
    assert d.vexflowDuration == 'hdd'
    assert Duration('64th').vexflowDuration is None


def test_repr():
    assert repr(Duration(1.5)) == "Duration('quarter', dots=1, quarterLength=3/2)"
    assert repr(Duration(1/3)) == "Duration('eighth', tuplets=[3:2], quarterLength=1/3)"


def test_durations_are_not_hashable():
    with pytest.raises(TypeError):
        hash(Duration(1))
