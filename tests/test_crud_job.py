"""
Tests for the job repository (app.crud.job).

Tests cover:
- Create with company reference checks and equity normalization
- Filtered listing
- Get / partial update / remove
"""

from decimal import Decimal

import pytest

from app.core.exceptions import InvalidInputError, InvalidReferenceError, NotFoundError
from app.crud import job as job_crud


NEW_JOB = {
    "title": "New",
    "salary": 500,
    "equity": "0.1",
    "companyHandle": "c1",
}


class TestCreate:
    """Tests for job_crud.create"""

    def test_create(self, db_session, seeded):
        job = job_crud.create(db_session, NEW_JOB)

        assert isinstance(job["id"], int)
        assert job == {"id": job["id"], **NEW_JOB}

    def test_create_then_get_round_trip(self, db_session, seeded):
        """Generated id included, record reads back unchanged"""
        created = job_crud.create(db_session, NEW_JOB)

        assert job_crud.get(db_session, created["id"]) == created

    def test_equity_as_decimal(self, db_session, seeded):
        job = job_crud.create(db_session, {**NEW_JOB, "equity": Decimal("0.25")})

        assert job["equity"] == "0.25"

    def test_optional_fields_missing(self, db_session, seeded):
        job = job_crud.create(db_session, {"title": "Bare", "companyHandle": "c2"})

        assert job["salary"] is None
        assert job["equity"] is None

    def test_unknown_company(self, db_session, seeded):
        with pytest.raises(InvalidReferenceError, match="nope"):
            job_crud.create(db_session, {**NEW_JOB, "companyHandle": "nope"})

    @pytest.mark.parametrize("bad", [
        {"equity": "1.5"},
        {"equity": "-0.1"},
        {"equity": "lots"},
        {"equity": "NaN"},
        {"equity": Decimal("NaN")},
        {"equity": "Infinity"},
        {"salary": -1},
    ])
    def test_out_of_range_values(self, db_session, seeded, bad):
        with pytest.raises(InvalidInputError):
            job_crud.create(db_session, {**NEW_JOB, **bad})


class TestFindAll:
    """Tests for job_crud.find_all"""

    def test_no_filter(self, db_session, seeded):
        ids = seeded["job_ids"]

        jobs = job_crud.find_all(db_session)

        assert jobs == [
            {"id": ids[0], "title": "J1", "salary": 100, "equity": "0.1", "companyHandle": "c1"},
            {"id": ids[1], "title": "J2", "salary": 200, "equity": "0.2", "companyHandle": "c1"},
            {"id": ids[2], "title": "J3", "salary": 300, "equity": None, "companyHandle": "c2"},
        ]

    def test_title_filter_case_insensitive(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, title="j2")

        assert [j["title"] for j in jobs] == ["J2"]

    def test_salary_range(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, min_salary=150, max_salary=300)

        assert [j["title"] for j in jobs] == ["J2", "J3"]

    def test_min_salary_above_max_fails(self, db_session, seeded):
        with pytest.raises(InvalidInputError):
            job_crud.find_all(db_session, min_salary=300, max_salary=100)

    def test_has_equity(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, has_equity=True)

        assert [j["title"] for j in jobs] == ["J1", "J2"]

    def test_has_equity_false_adds_no_filter(self, db_session, seeded):
        assert len(job_crud.find_all(db_session, has_equity=False)) == 3

    def test_company_handle(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, company_handle="c2")

        assert [j["title"] for j in jobs] == ["J3"]

    def test_combined_filters(self, db_session, seeded):
        jobs = job_crud.find_all(db_session, title="j", min_salary=150, has_equity=True)

        assert [j["title"] for j in jobs] == ["J2"]


class TestGet:
    """Tests for job_crud.get"""

    def test_get(self, db_session, seeded):
        job_id = seeded["job_ids"][0]

        job = job_crud.get(db_session, job_id)

        assert job == {"id": job_id, "title": "J1", "salary": 100, "equity": "0.1", "companyHandle": "c1"}

    def test_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.get(db_session, 0)


class TestUpdate:
    """Tests for job_crud.update"""

    def test_update(self, db_session, seeded):
        job_id = seeded["job_ids"][0]

        job = job_crud.update(db_session, job_id, {"title": "New", "salary": 1000, "equity": "0.5"})

        assert job == {"id": job_id, "title": "New", "salary": 1000, "equity": "0.5", "companyHandle": "c1"}

    def test_partial_update(self, db_session, seeded):
        job_id = seeded["job_ids"][1]

        job = job_crud.update(db_session, job_id, {"salary": 250})

        assert job["salary"] == 250
        assert job["title"] == "J2"
        assert job["equity"] == "0.2"

    def test_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.update(db_session, 0, {"title": "X"})

    def test_empty_data(self, db_session, seeded):
        with pytest.raises(InvalidInputError):
            job_crud.update(db_session, seeded["job_ids"][0], {})

    def test_title_cannot_be_nulled(self, db_session, seeded):
        job_id = seeded["job_ids"][0]

        with pytest.raises(InvalidInputError, match="title"):
            job_crud.update(db_session, job_id, {"title": None})

        assert job_crud.get(db_session, job_id)["title"] == "J1"

    def test_salary_and_equity_can_be_cleared(self, db_session, seeded):
        job = job_crud.update(db_session, seeded["job_ids"][0], {"salary": None, "equity": None})

        assert job["salary"] is None
        assert job["equity"] is None

    @pytest.mark.parametrize("fixed", [{"id": 42}, {"companyHandle": "c2"}])
    def test_fixed_fields_rejected(self, db_session, seeded, fixed):
        with pytest.raises(InvalidInputError):
            job_crud.update(db_session, seeded["job_ids"][0], fixed)


class TestRemove:
    """Tests for job_crud.remove"""

    def test_remove(self, db_session, seeded):
        job_id = seeded["job_ids"][0]

        job_crud.remove(db_session, job_id)

        with pytest.raises(NotFoundError):
            job_crud.get(db_session, job_id)

    def test_not_found(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            job_crud.remove(db_session, 0)
