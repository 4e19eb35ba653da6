import pytest

from server.src.readiness.sessions import RemediationSessionManager, missing_requirements
from sinar.compliance import build_comparison
from sinar.entities import BusinessProfile
from sinar.errors import StepLockedError, ValidationError
from sinar.ids import business_requirement_id, product_requirement_id
from sinar.loaders import load_catalog

HALAL_ID = business_requirement_id("biz", "Halal Certificate")


def _comparison(*documents: str):
    business = BusinessProfile.from_mapping(
        {"id": "biz", "industry": "F&B", "legal_documents": list(documents)}
    )
    return build_comparison(business, load_catalog())


def test_missing_requirements_ids():
    ids = missing_requirements("biz", _comparison("Business License"))
    assert HALAL_ID in ids
    assert business_requirement_id("biz", "Business License") not in ids


def test_toggle_accessibility_and_progress():
    manager = RemediationSessionManager()
    manager.sync("biz", _comparison("Business License"))

    assert manager.is_accessible(HALAL_ID, 1)
    assert not manager.is_accessible(HALAL_ID, 2)
    manager.toggle_step(HALAL_ID, 1)
    assert manager.is_accessible(HALAL_ID, 2)
    assert manager.progress(HALAL_ID) == pytest.approx(100 / 3)
    assert manager.redirect_for(HALAL_ID, 1).is_external


def test_sync_keeps_progress_and_closes_satisfied():
    manager = RemediationSessionManager()
    manager.sync("biz", _comparison("Business License"))
    manager.toggle_step(HALAL_ID, 1)

    manager.sync("biz", _comparison("Business License"))
    assert manager.get(HALAL_ID).tracker.completed == {1}

    manager.sync("biz", _comparison("Business License", "Halal Certificate"))
    with pytest.raises(KeyError):
        manager.get(HALAL_ID)


def test_strict_manager_gates_completion():
    manager = RemediationSessionManager(strict=True)
    manager.sync("biz", _comparison())
    with pytest.raises(StepLockedError):
        manager.toggle_step(HALAL_ID, 2)


def test_unknown_requirement():
    manager = RemediationSessionManager()
    with pytest.raises(KeyError):
        manager.toggle_step("business:nope:nothing", 1)


def test_sessions_are_scoped_per_business():
    manager = RemediationSessionManager()
    manager.sync("biz", _comparison())
    other = build_comparison(
        BusinessProfile.from_mapping({"id": "other", "industry": "Retail", "legal_documents": ["Tax ID"]}),
        load_catalog(),
    )
    manager.sync("other", other)
    assert {session.business_id for session in manager.list("biz")} == {"biz"}
    assert [session.requirement.type for session in manager.list("other")] == ["Business License"]


def _kopi_comparison(*names: str):
    business = BusinessProfile.from_mapping(
        {
            "id": "kopi",
            "industry": "F&B",
            "products": [
                {"name": name, "category": category}
                for name, category in zip(names, ["Food", "Beverage", "Food"])
            ],
        }
    )
    return build_comparison(business, load_catalog())


def test_products_with_colliding_slugs_get_separate_sessions():
    comparison = _kopi_comparison("Kopi Susu", "Kopi-Susu")
    expected = sum(product.missing_count for product in comparison.products)
    ids = missing_requirements("kopi", comparison)
    product_ids = [key for key in ids if key.startswith("product:")]
    assert len(product_ids) == expected

    manager = RemediationSessionManager()
    manager.sync("kopi", comparison)
    first = product_requirement_id("kopi", "Kopi Susu", "Halal Certificate")
    second = product_requirement_id("kopi", "Kopi-Susu", "Halal Certificate")
    assert first != second
    manager.toggle_step(first, 1)
    assert manager.get(first).tracker.completed == {1}
    assert manager.get(second).tracker.completed == frozenset()


def test_non_latin_product_names_stay_distinct():
    comparison = _kopi_comparison("咖啡", "コーヒー")
    product_ids = [key for key in missing_requirements("kopi", comparison) if key.startswith("product:")]
    assert len(product_ids) == sum(product.missing_count for product in comparison.products)


def test_duplicate_product_names_are_rejected():
    with pytest.raises(ValidationError):
        missing_requirements("kopi", _kopi_comparison("Kopi Susu", "Beras", "Kopi Susu"))
