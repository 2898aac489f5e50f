from __future__ import annotations

import random
from functools import lru_cache
from importlib.resources import files

import yaml

from orcamento.models.service import DEFAULT_UNIDADE, Service, new_id


@lru_cache(maxsize=1)
def _example_catalog() -> dict:
    template = files("orcamento") / "templates" / "servicos-exemplo.yaml"
    return yaml.safe_load(template.read_text(encoding="utf-8"))


def example_service_names() -> tuple[str, ...]:
    return tuple(_example_catalog()["servicos"])


def generate_example_services(rng: random.Random | None = None) -> list[Service]:
    """Fresh example catalog: new ids and a random whole price per service."""
    data = _example_catalog()
    rng = rng or random.Random()
    low = int(data.get("valor_minimo", 50))
    high = int(data.get("valor_maximo", 499))
    unidade = data.get("unidade", DEFAULT_UNIDADE)
    return [
        Service(id=new_id(), item=name, unidade=unidade, valor=float(rng.randint(low, high)))
        for name in data["servicos"]
    ]
