from __future__ import annotations

from orcamento.services.notices import Notice


def test_severity_mapping():
    assert Notice("info", "x").severity == "information"
    assert Notice("success", "x").severity == "information"
    assert Notice("error", "x").severity == "error"
