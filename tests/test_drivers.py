"""End-to-end tests for the CSF -> determinant drivers."""

from __future__ import annotations

import math
from fractions import Fraction

import numpy as np
import pytest

from csfdet import drivers
from csfdet.errors import InvalidSpinProjection, InvalidStepVector
from csfdet.guga.settings import ExpansionSettings
from csfdet.guga.tableau import build_tableau


def _run(stepvector, twoms, **kwargs) -> list[str]:
    lines: list[str] = []
    drivers.csf2det(stepvector, twoms, sink=lines.append, **kwargs)
    return lines


def test_closed_shell_single_orbital():
    assert _run("2", 0) == [
        "2 electrons in 1 orbitals",
        "output = phase * C^2 * SD",
        " + 1/1 |2|",
    ]


def test_single_alpha_electron():
    assert _run("u", 1)[2:] == [" + 1/1 |a|"]


def test_single_beta_electron():
    assert _run("u", -1)[2:] == [" + 1/1 |b|"]


def test_open_shell_singlet():
    assert _run("ud", 0) == [
        "2 electrons in 2 orbitals",
        "output = phase * C^2 * SD",
        " + 1/2 |ab|",
        " - 1/2 |ba|",
    ]


def test_doublet_expansion():
    assert _run("uud", 1)[2:] == [
        " - 2/3 |aab|",
        " + 1/6 |aba|",
        " + 1/6 |baa|",
    ]


def test_zero_terms_are_suppressed():
    res = drivers.expand_csf("udu", 1)
    assert [t.format() for t in res.terms] == [" + 1/2 |aba|", " - 1/2 |baa|"]
    assert res.stats.get("combinations") == 3
    assert res.stats.get("terms") == 2
    assert res.stats.get("zero") == 1


def test_spectator_orbitals_keep_their_labels():
    res = drivers.expand_csf("2ud0", 0)
    assert res.labels == ["2ab0", "2ba0"]
    assert [t.sign for t in res.terms] == [1, -1]


def test_invalid_step_vector_writes_nothing():
    lines: list[str] = []
    with pytest.raises(InvalidStepVector) as exc:
        drivers.csf2det("x", 0, sink=lines.append)
    assert "'x'" in str(exc.value)
    assert lines == []


@pytest.mark.parametrize("stepvector,twoms", [("u", 3), ("u", -3), ("2", 2), ("uud", 5)])
def test_infeasible_spin_projection_writes_nothing(stepvector, twoms):
    lines: list[str] = []
    with pytest.raises(InvalidSpinProjection) as exc:
        drivers.csf2det(stepvector, twoms, sink=lines.append)
    assert exc.value.twoms == twoms
    assert lines == []


def test_iterator_checks_spin_projection_eagerly():
    tab = build_tableau("u")
    with pytest.raises(InvalidSpinProjection):
        drivers.iter_determinant_terms(tab, 3)


@pytest.mark.parametrize(
    "stepvector",
    ["2", "u", "ud", "uu", "uud", "udu", "2ud0", "uuud", "uudd", "udud", "uuuddd", "uduudd", "uuuuu", "22ud0ud02", "u2d0uu"],
)
def test_every_spin_projection_is_normalized(stepvector):
    tab = build_tableau(stepvector)
    spin = tab.total_spin
    for twoms in range(-spin, spin + 1, 2):
        res = drivers.expand_csf(stepvector, twoms)
        assert res.total_weight() == Fraction(1)
        assert np.isclose(np.sum(res.amplitudes() ** 2), 1.0)
        assert len(res.terms) <= math.comb(tab.n_somo, res.n_alpha)
        assert res.stats.get("combinations") == math.comb(tab.n_somo, res.n_alpha)
        assert len(set(res.labels)) == len(res.labels)


@pytest.mark.parametrize("stepvector,twoms", [("22ud0ud02", 0), ("u2d0uu", 2), ("uuuddd", 0)])
def test_labels_follow_the_step_vector(stepvector, twoms):
    res = drivers.expand_csf(stepvector, twoms)
    for term in res.terms:
        assert len(term.label) == len(stepvector)
        assert set(term.label) <= {"0", "a", "b", "2"}
        for step, ch in zip(stepvector, term.label):
            if step == "2":
                assert ch == "2"
            elif step == "0":
                assert ch == "0"
            else:
                assert ch in ("a", "b")
        assert term.label.count("a") - term.label.count("b") == twoms


def test_output_is_deterministic():
    first = _run("22ud0ud02", 0)
    assert _run("22ud0ud02", 0) == first
    assert len(first) > 2


def test_high_spin_projection_off_the_csf_spin_yields_nothing():
    assert _run("ud", 2)[2:] == []


def test_invalid_coupling_yields_no_determinants():
    res = drivers.expand_csf("du", 0)
    assert res.terms == ()
    assert res.stats.get("zero") == 2


def test_strict_mode_rejects_invalid_coupling():
    with pytest.raises(InvalidStepVector) as exc:
        drivers.expand_csf("du", 0, settings=ExpansionSettings(strict=True))
    assert exc.value.position == 0


@pytest.mark.parametrize("stepvector,twoms", [("ud", 2), ("uu", 1), ("uud", -3)])
def test_strict_mode_rejects_ms_outside_spin(stepvector, twoms):
    with pytest.raises(InvalidSpinProjection):
        drivers.expand_csf(stepvector, twoms, settings=ExpansionSettings(strict=True))


def test_strict_mode_from_environment(monkeypatch):
    monkeypatch.setenv("CSFDET_STRICT", "1")
    with pytest.raises(InvalidSpinProjection):
        drivers.expand_csf("ud", 2)


def test_strict_mode_accepts_valid_input():
    res = drivers.expand_csf("uud", -1, settings=ExpansionSettings(strict=True))
    assert res.total_weight() == 1


def test_verbose_adds_header_and_summary():
    lines = _run("uud", 1, verbose=1)
    assert lines[0] == "CSF: uud, Ms: 1/2"
    assert lines[1:3] == ["3 electrons in 3 orbitals", "output = phase * C^2 * SD"]
    assert lines[-1].startswith("3 determinants from 3 spin assignments (0 with zero coefficient)")
    assert len(lines) == 7


def test_result_lines_match_sink_output():
    res = drivers.csf2det("uuud", 2, sink=lambda _line: None)
    assert _run("uuud", 2) == res.lines()
    assert res.n_electrons == 4
    assert res.n_mo == 4


def test_alpha_count_floors():
    assert drivers.alpha_count(3, 1) == 2
    assert drivers.alpha_count(1, -3) == -1
    assert drivers.alpha_count(2, 1) == 1
