from __future__ import annotations

from datetime import datetime

from app.domain.meter_reading import MeterReadingInput
from app.services.meter_reading_deduplicator import MeterReadingDeduplicator
from conftest import FakeReadingStore


def _reading(account_id: int, minute: int, value: str, row_number: int | None = None) -> MeterReadingInput:
    return MeterReadingInput(
        account_id=account_id,
        read_at=datetime(2019, 4, 22, 9, minute),
        read_value=value,
        row_number=row_number,
    )


class TestMeterReadingDeduplicator:
    def test_removes_stored_readings_and_counts_them(self) -> None:
        store = FakeReadingStore(stored=[_reading(2, 0, "20034")])
        deduplicator = MeterReadingDeduplicator(store)

        result = deduplicator.remove_duplicates(
            [_reading(1, 0, "10024", 2), _reading(2, 0, "20034", 3)]
        )

        assert [r.account_id for r in result.unique] == [1]
        assert result.duplicate_count == 1

    def test_all_three_fields_must_match(self) -> None:
        store = FakeReadingStore(stored=[_reading(1, 0, "10024")])
        deduplicator = MeterReadingDeduplicator(store)

        result = deduplicator.remove_duplicates(
            [_reading(1, 1, "10024"), _reading(1, 0, "10025"), _reading(2, 0, "10024")]
        )

        assert len(result.unique) == 3
        assert result.duplicate_count == 0

    def test_row_number_does_not_affect_equality(self) -> None:
        store = FakeReadingStore(stored=[_reading(1, 0, "10024", row_number=99)])

        result = MeterReadingDeduplicator(store).remove_duplicates([_reading(1, 0, "10024", 2)])

        assert result.unique == ()
        assert result.duplicate_count == 1

    def test_repeats_within_batch_keep_first_occurrence(self) -> None:
        deduplicator = MeterReadingDeduplicator(FakeReadingStore())

        result = deduplicator.remove_duplicates(
            [_reading(1, 0, "10024", 2), _reading(1, 0, "10024", 3), _reading(2, 0, "10024", 4)]
        )

        assert [r.row_number for r in result.unique] == [2, 4]
        assert result.duplicate_count == 1

    def test_empty_input_skips_store(self) -> None:
        class ExplodingStore(FakeReadingStore):
            def find_non_duplicates(self, readings):
                raise AssertionError("store should not be queried")

        result = MeterReadingDeduplicator(ExplodingStore()).remove_duplicates([])

        assert result.unique == ()
        assert result.duplicate_count == 0
