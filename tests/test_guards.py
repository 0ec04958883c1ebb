"""Tests for precondition guards."""

from deed_ledger.exceptions import (
    AlreadyExistsError,
    BalanceOverflowError,
    InsufficientFundsError,
    InvalidAmountError,
    PersonNotFoundError,
    PropertyNotFoundError,
    SellerNotOwnerError,
)
from deed_ledger.models import MAX_BALANCE, Person, Property
from deed_ledger.store import guards


class TestFirstFailure:
    """Tests for ordered guard evaluation."""

    def test_all_pass(self) -> None:
        assert guards.first_failure([lambda: None, lambda: None]) is None

    def test_returns_first_failure_and_stops(self) -> None:
        calls: list[str] = []
        first = AlreadyExistsError("first")

        def failing() -> AlreadyExistsError:
            calls.append("failing")
            return first

        def never() -> None:
            calls.append("never")
            raise AssertionError("evaluated after a failure")

        assert guards.first_failure([lambda: None, failing, never]) is first
        assert calls == ["failing"]

    def test_empty(self) -> None:
        assert guards.first_failure([]) is None


class TestUnsignedAmount:
    """Tests for amount validation."""

    def test_bounds_accepted(self) -> None:
        assert guards.unsigned_amount(0, "amount") is None
        assert guards.unsigned_amount(MAX_BALANCE, "amount") is None

    def test_out_of_range(self) -> None:
        assert isinstance(guards.unsigned_amount(-1, "amount"), InvalidAmountError)
        assert isinstance(guards.unsigned_amount(MAX_BALANCE + 1, "amount"), InvalidAmountError)

    def test_non_integers(self) -> None:
        err = guards.unsigned_amount(2.5, "price")
        assert isinstance(err, InvalidAmountError)
        assert "price must be an integer" in str(err)
        assert isinstance(guards.unsigned_amount(False, "price"), InvalidAmountError)


class TestExistenceGuards:
    """Tests for key and reference guards."""

    def test_key_must_be_free(self) -> None:
        taken = {"0xa"}
        assert guards.key_must_be_free(taken.__contains__, "0xb", "Person") is None
        err = guards.key_must_be_free(taken.__contains__, "0xa", "Person")
        assert isinstance(err, AlreadyExistsError)
        assert str(err) == "Person 0xa already exists"

    def test_person_must_exist(self) -> None:
        known = {"0xa"}
        assert guards.person_must_exist(known.__contains__, "0xa") is None
        err = guards.person_must_exist(known.__contains__, "0xz")
        assert isinstance(err, PersonNotFoundError)
        assert err.person_id == "0xz"

    def test_property_must_exist(self) -> None:
        known = {1}
        assert guards.property_must_exist(known.__contains__, 1) is None
        assert isinstance(guards.property_must_exist(known.__contains__, 2), PropertyNotFoundError)


class TestFundsGuards:
    """Tests for balance guards."""

    def test_sufficient_funds(self) -> None:
        buyer = Person("0xb", "B", 100)
        assert guards.sufficient_funds(buyer, 100) is None
        err = guards.sufficient_funds(buyer, 101)
        assert isinstance(err, InsufficientFundsError)
        assert err.balance == 100

    def test_credit_must_fit(self) -> None:
        buyer = Person("0xb", "B", 100)
        seller = Person("0xs", "S", MAX_BALANCE - 10)
        assert guards.credit_must_fit(buyer, seller, 10) is None
        assert isinstance(guards.credit_must_fit(buyer, seller, 11), BalanceOverflowError)

    def test_credit_must_fit_same_person(self) -> None:
        person = Person("0xa", "A", MAX_BALANCE)
        assert guards.credit_must_fit(person, person, MAX_BALANCE) is None

    def test_seller_must_own(self) -> None:
        prop = Property(deed=1, owner_id="0xo", location="Lot", price=1)
        assert guards.seller_must_own(prop, "0xo") is None
        err = guards.seller_must_own(prop, "0xs")
        assert isinstance(err, SellerNotOwnerError)
        assert (err.seller_id, err.owner_id, err.deed) == ("0xs", "0xo", 1)
