"""Unit tests for the SQLModel repository implementations."""

from __future__ import annotations

from sqlmodel import select

from payoffsage.models import EXTRA_PAYMENT_KEY, STRATEGY_KEY, Debt, PayoffPreference


class TestDebtRepository:
    def test_save_assigns_id(self, debt_repo):
        debt = debt_repo.save(
            Debt(name="Visa", balance=5000.0, interest_rate=18.99, minimum_payment=150.0)
        )

        assert debt.id is not None
        fetched = debt_repo.get_by_id(debt.id)
        assert fetched is not None
        assert fetched.name == "Visa"
        assert fetched.interest_rate == 18.99

    def test_list_all_keeps_insertion_order(self, debt_factory, debt_repo):
        debt_factory(name="Zeta")
        debt_factory(name="Alpha")
        debt_factory(name="Mid")

        assert [d.name for d in debt_repo.list_all()] == ["Zeta", "Alpha", "Mid"]
        assert debt_repo.count() == 3

    def test_save_updates_existing_row(self, debt_factory, debt_repo):
        debt = debt_factory(name="Car", balance=12000.0)

        debt.balance = 11500.0
        debt_repo.save(debt)

        assert debt_repo.get_by_id(debt.id).balance == 11500.0
        assert debt_repo.count() == 1

    def test_save_updates_from_fresh_instance(self, debt_factory, debt_repo):
        debt = debt_factory(name="Car", balance=12000.0)

        replacement = Debt(
            id=debt.id,
            name="Car loan",
            balance=11000.0,
            interest_rate=debt.interest_rate,
            minimum_payment=debt.minimum_payment,
        )
        debt_repo.save(replacement)

        stored = debt_repo.get_by_id(debt.id)
        assert stored.name == "Car loan"
        assert stored.balance == 11000.0

    def test_delete(self, debt_factory, debt_repo):
        debt = debt_factory()
        debt_repo.delete(debt.id)
        assert debt_repo.get_by_id(debt.id) is None

    def test_delete_missing_is_noop(self, debt_repo):
        debt_repo.delete(999)
        assert debt_repo.list_all() == []

    def test_total_debt(self, debt_factory, debt_repo):
        debt_factory(balance=1000.0)
        debt_factory(balance=2500.5)
        assert debt_repo.get_total_debt() == 3500.5


class TestPreferenceRepository:
    def test_empty_store(self, preference_repo):
        assert preference_repo.get_strategy() is None
        assert preference_repo.get_extra_payment() is None

    def test_save_and_read_back(self, preference_repo):
        preference_repo.save(strategy="snowball", extra_payment="250.50")

        assert preference_repo.get_strategy() == "snowball"
        assert preference_repo.get_extra_payment() == "250.50"

    def test_save_overwrites_only_given_values(self, preference_repo):
        preference_repo.save(strategy="snowball", extra_payment="100")
        preference_repo.save(strategy="avalanche")

        assert preference_repo.get_strategy() == "avalanche"
        assert preference_repo.get_extra_payment() == "100"

    def test_rows_use_planner_keys(self, preference_repo, session_factory):
        preference_repo.save(strategy="snowball", extra_payment="5")

        with session_factory() as session:
            keys = {row.key for row in session.exec(select(PayoffPreference)).all()}
        assert keys == {STRATEGY_KEY, EXTRA_PAYMENT_KEY}

    def test_clear(self, preference_repo):
        preference_repo.save(strategy="snowball", extra_payment="5")
        preference_repo.clear()

        assert preference_repo.get_strategy() is None
        assert preference_repo.get_extra_payment() is None
