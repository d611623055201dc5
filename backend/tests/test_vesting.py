from datetime import date

from gringotts import Holding
from gringotts.vesting import is_liquid, is_vested_by, partition, vesting_offset

AS_OF = date(2026, 10, 19)


def _holding(vest_date=None) -> Holding:
    return Holding(id="h", name="RSU", quantity=1, purchase_price=1, vest_date=vest_date)


def test_liquid_without_vest_date_or_when_vested():
    assert is_liquid(_holding(), AS_OF)
    assert is_liquid(_holding(date(2025, 1, 1)), AS_OF)
    assert is_liquid(_holding(AS_OF), AS_OF)


def test_unvested_when_vest_date_in_future():
    assert not is_liquid(_holding(date(2026, 10, 20)), AS_OF)


def test_offset_counts_calendar_quarters():
    # AS_OF is in Q4 2026
    assert vesting_offset(_holding(date(2026, 12, 31)), AS_OF) == 0
    assert vesting_offset(_holding(date(2027, 1, 1)), AS_OF) == 1
    assert vesting_offset(_holding(date(2027, 5, 15)), AS_OF) == 2
    assert vesting_offset(_holding(date(2028, 11, 1)), AS_OF) == 8


def test_offset_is_none_for_liquid_holdings():
    assert vesting_offset(_holding(), AS_OF) is None
    assert vesting_offset(_holding(date(2020, 6, 1)), AS_OF) is None
    assert vesting_offset(_holding(AS_OF), AS_OF) is None


def test_vested_by_period():
    assert is_vested_by(None, 0)
    assert not is_vested_by(2, 1)
    assert is_vested_by(2, 2)
    assert is_vested_by(2, 3)


def test_partition_preserves_every_holding():
    holdings = [_holding(), _holding(date(2030, 1, 1)), _holding(date(2020, 1, 1))]
    liquid, unvested = partition(holdings, AS_OF)
    assert len(liquid) == 2
    assert len(unvested) == 1
    assert unvested[0].vest_date == date(2030, 1, 1)
