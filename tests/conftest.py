from __future__ import annotations

from datetime import datetime, timezone

import pytest

from sinar.compliance import ComplianceCatalog
from sinar.entities import (
    BusinessClassification,
    BusinessProfile,
    FinancialSnapshot,
    LegalDocument,
    Product,
    ProductCategory,
    RedirectTarget,
    RemediationStep,
    RequirementTemplate,
)


def _steps(*descriptions: str) -> tuple:
    return tuple(
        RemediationStep(step_number=index, description=text, redirect=RedirectTarget.parse(f"/legal/guide/{index}"))
        for index, text in enumerate(descriptions, start=1)
    )


@pytest.fixture()
def fnb_catalog() -> ComplianceCatalog:
    return ComplianceCatalog.build(
        businesses={
            "F&B": [
                RequirementTemplate(type="Business License", steps=_steps("Register on OSS", "Download NIB")),
                RequirementTemplate(
                    type="Halal Certificate",
                    notes="Needed for food outlets",
                    steps=_steps("Register on SIHALAL", "Prepare documents", "Audit"),
                ),
            ]
        },
        products={
            "Food": [
                RequirementTemplate(type="Home Industry Food Permit", steps=_steps("Counselling", "Apply")),
            ]
        },
    )


@pytest.fixture()
def warung() -> BusinessProfile:
    return BusinessProfile(
        id="biz-1",
        name="Warung Sinar",
        classification=BusinessClassification.F_AND_B,
        description="Family-run warung in Bandung",
        market_cap=5_000_000_000,
        products=[Product(name="Sambal Roa", category=ProductCategory.FOOD)],
        legal_documents=[LegalDocument(type="Business License")],
        financial_history=[
            FinancialSnapshot(
                id="fin-1",
                created_at=datetime(2024, 6, 30, tzinfo=timezone.utc),
                revenue=3_000_000_000,
                ebitda=500_000_000,
            )
        ],
    )
