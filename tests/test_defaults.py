from __future__ import annotations

import random

from orcamento.models.service import DEFAULT_UNIDADE
from orcamento.services.defaults import example_service_names, generate_example_services


def test_example_names_loaded_from_template():
    names = example_service_names()
    assert len(names) == 51
    assert "Instalar Varal de Teto" in names
    assert len(set(names)) == len(names)


def test_generate_example_services():
    services = generate_example_services()
    assert [s.item for s in services] == list(example_service_names())
    assert all(s.unidade == DEFAULT_UNIDADE for s in services)
    assert all(50 <= s.valor <= 499 and s.valor.is_integer() for s in services)


def test_generate_gives_fresh_ids():
    first = generate_example_services()
    second = generate_example_services()
    assert {s.id for s in first}.isdisjoint(s.id for s in second)
    assert len({s.id for s in first}) == len(first)


def test_generate_with_seeded_rng_is_repeatable():
    a = generate_example_services(random.Random(42))
    b = generate_example_services(random.Random(42))
    assert [s.valor for s in a] == [s.valor for s in b]
