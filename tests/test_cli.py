from __future__ import annotations

import json

import pytest

import cli

PROFILE = """\
id: biz-cli
name: Kopi Nusantara
industry: F&B
description: Specialty coffee roaster
products:
  - name: Cold Brew
    category: Beverage
legal_documents:
  - Business License
financial_history:
  - id: f2
    created_at: 2024-06-01
    revenue: 60000000000
    ebitda: 2000000000
  - id: f1
    created_at: 2023-06-01
    revenue: 3000000000
    ebitda: 500000000
"""


@pytest.fixture()
def profile_path(tmp_path):
    path = tmp_path / "kopi.yaml"
    path.write_text(PROFILE, encoding="utf-8")
    return path


def _run(capsys, *argv):
    assert cli.main(list(argv)) == 0
    return json.loads(capsys.readouterr().out)


def test_cli_score(capsys, profile_path):
    payload = _run(capsys, "score", "--business", str(profile_path))
    assert payload["value"] == 90
    assert payload["stage"] == "Investment Ready"
    assert payload["breakdown"]["market_cap"] == 0


def test_cli_valuation(capsys, profile_path):
    payload = _run(capsys, "valuation", "--business", str(profile_path))
    assert payload["current"] == 10_000_000_000
    assert payload["multiplier"] == 5.0
    assert [point["period"] for point in payload["history"]] == ["2023-06", "2024-06"]
    assert payload["investment_capacity"]["remaining"] == 10_000_000_000


def test_cli_valuation_existing_investment(capsys, profile_path):
    payload = _run(capsys, "valuation", "--business", str(profile_path), "--existing", "12000000000")
    assert payload["investment_capacity"] == {
        "maximum": 10_000_000_000,
        "existing": 12_000_000_000,
        "remaining": 0.0,
        "minimum": 0.0,
    }


def test_cli_compare_uses_bundled_catalog(capsys, profile_path):
    payload = _run(capsys, "compare", "--business", str(profile_path))
    types = [req["type"] for req in payload["required"]]
    assert types[:2] == ["Business License", "Halal Certificate"]
    assert payload["required"][0]["has_legal"] is True
    assert "steps" in payload["required"][1]
    assert payload["products"][0]["product_name"] == "Cold Brew"
    assert payload["missing_count"] >= 1


def test_cli_without_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()
