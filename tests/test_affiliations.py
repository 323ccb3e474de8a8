"""
Affiliations: uniqueness of the active pair, soft deactivation, listings
"""
import pytest
from sqlalchemy.exc import IntegrityError

from assetverse.database import transaction
from assetverse.errors import Conflict, Forbidden, NotFound, ValidationError
from assetverse.models import Affiliation


def test_duplicate_active_affiliation_conflicts(services, make_hr, make_employee, affiliate):
    make_hr()
    make_employee()
    affiliate("hr@x.com", "e@x.com")

    with pytest.raises(Conflict):
        affiliate("hr@x.com", "e@x.com")

    assert services.affiliations.count_active("hr@x.com") == 1


def test_self_affiliation_rejected(services, make_hr):
    make_hr()
    with pytest.raises(ValidationError):
        with transaction(services.db):
            services.affiliations.affiliate("hr@x.com", "hr@x.com", "HR", "X Corp")


def test_deactivate_keeps_history_and_allows_rejoin(services, make_hr, make_employee, affiliate):
    make_hr()
    make_employee()
    first = affiliate("hr@x.com", "e@x.com")

    with transaction(services.db):
        services.affiliations.deactivate("hr@x.com", "e@x.com")
    assert not services.affiliations.is_affiliated("hr@x.com", "e@x.com")

    second = affiliate("hr@x.com", "e@x.com")
    assert second.id != first.id

    rows = services.repos.affiliations.find(hr_email="hr@x.com", employee_email="e@x.com", order_by=Affiliation.id.asc())
    assert [r.status for r in rows] == ["inactive", "active"]


def test_deactivate_without_active_affiliation(services, make_hr, make_employee):
    make_hr()
    make_employee()
    with pytest.raises(NotFound):
        with transaction(services.db):
            services.affiliations.deactivate("hr@x.com", "e@x.com")


def test_employee_status_follows_affiliations(services, make_hr, make_employee, affiliate):
    make_hr()
    make_hr("hr2@y.com", company_name="Y Corp")
    employee = make_employee()
    assert employee.status == "unassigned"

    affiliate("hr@x.com", "e@x.com")
    affiliate("hr2@y.com", "e@x.com")
    services.db.refresh(employee)
    assert employee.status == "affiliated"

    with transaction(services.db):
        services.affiliations.deactivate("hr@x.com", "e@x.com")
    services.db.refresh(employee)
    assert employee.status == "affiliated"

    with transaction(services.db):
        services.affiliations.deactivate("hr2@y.com", "e@x.com")
    services.db.refresh(employee)
    assert employee.status == "unassigned"


def test_unique_index_blocks_second_active_row(services, make_hr, make_employee, affiliate):
    make_hr()
    make_employee()
    affiliate("hr@x.com", "e@x.com")

    # Bypass the manager's pre-check the way a racing writer would
    with pytest.raises(IntegrityError):
        with transaction(services.db):
            services.repos.affiliations.insert(
                hr_email="hr@x.com",
                employee_email="e@x.com",
                employee_name="E",
                company_name="X Corp",
                status="active",
            )


def test_list_active_for_hr_counts_held_assets(services, make_hr, make_employee, make_asset, affiliate):
    make_hr()
    make_employee()
    make_employee("f@x.com", "F")
    affiliate("hr@x.com", "e@x.com")
    affiliate("hr@x.com", "f@x.com", "F")
    asset = make_asset(quantity=3)

    with transaction(services.db):
        services.assignments.assign_direct(str(asset.id), "hr@x.com", "e@x.com")
        services.assignments.assign_direct(str(asset.id), "hr@x.com", "e@x.com")

    listing = {row["employee_email"]: row for row in services.affiliations.list_active_for_hr("hr@x.com")}
    assert listing["e@x.com"]["assets_count"] == 2
    assert listing["f@x.com"]["assets_count"] == 0


def test_team_listing_requires_membership(services, make_hr, make_employee, affiliate):
    make_hr()
    make_employee()
    make_employee("f@x.com", "F")
    make_employee("outsider@x.com", "O")
    affiliate("hr@x.com", "e@x.com")
    affiliate("hr@x.com", "f@x.com", "F")

    team = services.affiliations.list_team("hr@x.com", "e@x.com")
    assert {m["employee_email"] for m in team} == {"e@x.com", "f@x.com"}

    with pytest.raises(Forbidden):
        services.affiliations.list_team("hr@x.com", "outsider@x.com")


def test_employee_sees_companies(services, make_hr, make_employee, affiliate):
    make_hr()
    make_employee()
    affiliate("hr@x.com", "e@x.com")

    companies = services.affiliations.list_active_for_employee("e@x.com")
    assert [c["hr_email"] for c in companies] == ["hr@x.com"]
    assert companies[0]["company_name"] == "X Corp"
