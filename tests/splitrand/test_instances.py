from __future__ import annotations

import pytest

from splitrand.core.config import SamplerConfig, build_generator
from splitrand.core.errors import RandError
from splitrand.domains import Bitvec, Fin
from splitrand.generators import PhiloxGen, mk_std_gen
from splitrand.instances import (
    BOOL,
    INT,
    NAT,
    BitvecSampler,
    FinSampler,
    bitvec,
    fin,
    instance_for,
    one_of,
    random_range,
    random_value,
    samplers_for,
)
from splitrand.rand import replicate


def _gens(count: int = 40):
    for seed in range(count):
        yield mk_std_gen(seed)
        yield PhiloxGen.from_seed(seed)


def test_bool_value_and_full_range_are_output_identical() -> None:
    for gen in _gens():
        assert random_value(BOOL).run(gen) == random_range(False, True).run(gen)


def test_bool_bounded_projects_endpoints() -> None:
    gen = mk_std_gen(5)
    assert replicate(20, random_range(True, True)).eval(gen) == [True] * 20
    assert replicate(20, random_range(False, False)).eval(gen) == [False] * 20
    both = set(replicate(200, random_value(BOOL)).eval(gen))
    assert both == {False, True}
    with pytest.raises(RandError) as excinfo:
        random_range(True, False)
    assert excinfo.value.code == "E_RANGE_ORDER"
    with pytest.raises(RandError):
        BOOL.random_range(False, 1)  # type: ignore[arg-type]


def test_fin_values_stay_below_modulus() -> None:
    sampler = fin(6)
    for gen in _gens(10):
        values = replicate(30, random_value(sampler)).eval(gen)
        assert all(isinstance(v, Fin) and v.n == 6 and 0 <= v.val < 6 for v in values)


def test_fin_bounded_lifts_through_values() -> None:
    lo, hi = Fin(10, 3), Fin(10, 5)
    for gen in _gens(10):
        for value in replicate(20, random_range(lo, hi)).eval(gen):
            assert lo <= value <= hi
    with pytest.raises(RandError) as excinfo:
        random_range(Fin(10, 3), Fin(11, 5))
    assert excinfo.value.code == "E_DOMAIN_MISMATCH"
    with pytest.raises(RandError) as excinfo:
        random_range(Fin(10, 6), Fin(10, 5))
    assert excinfo.value.code == "E_RANGE_ORDER"


def test_fin_modulus_must_be_positive() -> None:
    with pytest.raises(RandError) as excinfo:
        FinSampler(0)
    assert excinfo.value.code == "E_DOMAIN_FIN"
    with pytest.raises(RandError):
        Fin(3, 3)


def test_bitvec_value_matches_full_fin_range() -> None:
    width = 5
    top = Fin(2**width, 2**width - 1)
    via_fin = random_range(Fin(2**width, 0), top).map(lambda f: Bitvec.from_fin(width, f))
    for gen in _gens():
        assert random_value(bitvec(width)).run(gen) == via_fin.run(gen)


def test_bitvec_bounded_range_and_bit_pattern() -> None:
    lo = Bitvec.from_bools([False, True, False, False])
    hi = Bitvec.from_bools([True, False, False, True])
    assert (lo.bits, hi.bits) == (4, 9)
    for gen in _gens(10):
        for value in replicate(20, random_range(lo, hi)).eval(gen):
            assert value.width == 4
            assert lo <= value <= hi
            assert Bitvec.from_bools(value.to_bools()) == value
    assert str(Bitvec(4, 5)) == "0101"
    with pytest.raises(RandError):
        random_range(Bitvec(4, 1), Bitvec(5, 1))


def test_zero_width_bitvec_is_the_empty_pattern() -> None:
    value = random_value(BitvecSampler(0)).eval(mk_std_gen(0))
    assert value == Bitvec(0, 0)
    assert value.to_bools() == ()


def test_wide_bitvec_is_bounded_by_width_limit() -> None:
    value = random_value(bitvec(256)).eval(PhiloxGen.from_seed(2))
    assert 0 <= value.bits < 2**256
    with pytest.raises(RandError) as excinfo:
        random_value(BitvecSampler(65, max_width_bits=64))
    assert excinfo.value.code == "E_RANGE_WIDTH"


def test_nat_and_int_instances() -> None:
    gen = mk_std_gen(12)
    assert all(3 <= v <= 9 for v in replicate(50, NAT.random_range(3, 9)).eval(gen))
    assert all(-9 <= v <= -3 for v in replicate(50, INT.random_range(-9, -3)).eval(gen))
    assert NAT.random_range(3, 9).run(gen) == INT.random_range(3, 9).run(gen)
    with pytest.raises(RandError) as excinfo:
        NAT.random_range(-2, 2)
    assert excinfo.value.code == "E_DOMAIN_NAT"


@pytest.mark.parametrize(
    "make",
    [
        lambda: INT.random_range(False, 5),
        lambda: INT.random_range(-3, True),
        lambda: NAT.random_range(True, 3),
        lambda: random_range(False, 5, INT),
    ],
)
def test_nat_and_int_reject_bool_endpoints(make) -> None:
    with pytest.raises(RandError) as excinfo:
        make()
    assert excinfo.value.code == "E_DOMAIN_MISMATCH"


def test_samplers_for_applies_configured_width_cap() -> None:
    config = SamplerConfig(generator="stdgen", seed=1, max_width_bits=8)
    samplers = samplers_for(config)
    gen = build_generator(config)
    for make in (
        lambda: samplers.nat.random_range(0, 2**100),
        lambda: samplers.integer.random_range(-(2**9), 0),
        lambda: samplers.fin(2**9).random(),
        lambda: samplers.bitvec(9).random(),
    ):
        with pytest.raises(RandError) as excinfo:
            make().eval(gen)
        assert excinfo.value.code == "E_RANGE_WIDTH"
    assert 0 <= samplers.nat.random_range(0, 255).eval(gen) <= 255
    assert samplers.fin(256).random().eval(gen).n == 256
    assert samplers.boolean is BOOL
    assert samplers_for(SamplerConfig.default()).nat == NAT


def test_instance_inference() -> None:
    assert instance_for(True) is BOOL
    assert instance_for(4) is INT
    assert instance_for(Fin(3, 1)) == FinSampler(3)
    assert instance_for(Bitvec(8, 1)) == BitvecSampler(8)
    with pytest.raises(RandError) as excinfo:
        instance_for(1.5)
    assert excinfo.value.code == "E_NO_INSTANCE"


def test_random_value_requires_canonical_instance() -> None:
    with pytest.raises(RandError) as excinfo:
        random_value(NAT)  # type: ignore[arg-type]
    assert excinfo.value.code == "E_NO_INSTANCE"


def test_one_of_picks_every_item() -> None:
    items = ["a", "b", "c", "d"]
    picks = replicate(400, one_of(items)).eval(PhiloxGen.from_seed(8))
    assert set(picks) == set(items)
    with pytest.raises(RandError) as excinfo:
        one_of([])
    assert excinfo.value.code == "E_EMPTY_CHOICE"
