"""
Advanced tests for the transfer engine.
Tests concurrency: double spending, opposite-direction transfers and lost updates.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
import threading

import pytest

from app.core.errors import BankCardsError, ErrorCode
from app.models.transaction import Transaction
from app.services.transfers import TransferEngine


def run_transfer(session_factory, from_card, to_card, amount, username):
    """Run one transfer in its own session, as a request worker would."""
    db = session_factory()
    try:
        TransferEngine(db).transfer(from_card, to_card, amount, username)
        return "success"
    except BankCardsError as exc:
        return exc.code
    finally:
        db.close()


@pytest.fixture
def alex(make_user):
    return make_user("alex")


def test_opposite_direction_transfers_settle(alex, make_card, balance_of, session_factory):
    """A->B 100 and B->A 50 from 200/200 always end at A=150, B=250."""
    for _ in range(5):
        card_a = make_card(alex, balance=200)
        card_b = make_card(alex, balance=200)
        barrier = threading.Barrier(2)

        def transfer(from_card, to_card, amount):
            barrier.wait()
            return run_transfer(session_factory, from_card, to_card, amount, "alex")

        with ThreadPoolExecutor(max_workers=2) as executor:
            first = executor.submit(transfer, card_a.id, card_b.id, 100)
            second = executor.submit(transfer, card_b.id, card_a.id, 50)
            results = [first.result(), second.result()]

        assert results == ["success", "success"]
        assert balance_of(card_a.id) == 150
        assert balance_of(card_b.id) == 250


def test_concurrent_transfers_same_card(alex, make_card, balance_of, session_factory):
    """
    Many concurrent transfers out of the same card.
    No update may be lost.
    """
    source = make_card(alex, balance=1000)
    dest = make_card(alex, balance=0)

    with ThreadPoolExecutor(max_workers=10) as executor:
        futures = [
            executor.submit(run_transfer, session_factory, source.id, dest.id, 10, "alex")
            for _ in range(40)
        ]
        results = [future.result() for future in as_completed(futures)]

    assert results.count("success") == 40
    assert balance_of(source.id) == 600
    assert balance_of(dest.id) == 400


def test_concurrent_double_spend(alex, make_card, balance_of, session_factory):
    """
    Ten threads try to spend 20 each from a card holding 100.
    Exactly five succeed and the balance never goes negative.
    """
    racer = make_card(alex, balance=100)
    receiver = make_card(alex, balance=0)

    with ThreadPoolExecutor(max_workers=10) as executor:
        futures = [
            executor.submit(run_transfer, session_factory, racer.id, receiver.id, 20, "alex")
            for _ in range(10)
        ]
        results = [future.result() for future in as_completed(futures)]

    assert results.count("success") == 5
    assert results.count(ErrorCode.INSUFFICIENT_FUNDS) == 5
    assert balance_of(racer.id) == 0
    assert balance_of(receiver.id) == 100

    db = session_factory()
    try:
        assert db.query(Transaction).count() == 5
    finally:
        db.close()


def test_concurrent_bidirectional_transfers(alex, make_card, balance_of, session_factory):
    """
    Two workers move money back and forth between the same pair of cards.
    Tests deadlock prevention and consistency.
    """
    card_a = make_card(alex, balance=1000)
    card_b = make_card(alex, balance=1000)

    def a_to_b():
        for _ in range(10):
            run_transfer(session_factory, card_a.id, card_b.id, 10, "alex")

    def b_to_a():
        for _ in range(10):
            run_transfer(session_factory, card_b.id, card_a.id, 10, "alex")

    thread1 = threading.Thread(target=a_to_b)
    thread2 = threading.Thread(target=b_to_a)

    thread1.start()
    thread2.start()

    thread1.join()
    thread2.join()

    # Net effect should be zero (10*10 each way)
    assert balance_of(card_a.id) == 1000
    assert balance_of(card_b.id) == 1000
