from __future__ import annotations

import io
import unittest
from datetime import datetime

from app.validators.meter_reading_parser import (
    ACCOUNT_ID_COLUMN,
    EMPTY_ROW_MESSAGE,
    READ_AT_COLUMN,
    MeterReadingCSVParser,
    parse_account_id,
    parse_read_at,
)
from conftest import make_csv


class TestParseReadAt(unittest.TestCase):
    def test_parses_zero_padded_format(self) -> None:
        self.assertEqual(parse_read_at("22/04/2019 09:24"), datetime(2019, 4, 22, 9, 24))

    def test_parses_non_padded_format(self) -> None:
        self.assertEqual(parse_read_at("2/4/2019 9:05"), datetime(2019, 4, 2, 9, 5))

    def test_parses_seconds_and_iso(self) -> None:
        self.assertEqual(parse_read_at("22/04/2019 09:24:31"), datetime(2019, 4, 22, 9, 24, 31))
        self.assertEqual(parse_read_at("2019-04-22T09:24:31.987"), datetime(2019, 4, 22, 9, 24, 31))

    def test_aware_iso_is_converted_to_naive_utc(self) -> None:
        self.assertEqual(parse_read_at("2019-04-22T10:24:00+01:00"), datetime(2019, 4, 22, 9, 24))

    def test_rejects_unknown_formats(self) -> None:
        for raw in ("abc", "", "   ", "31/02/2019 10:00", "22-04-2019 09:24", None):
            with self.subTest(raw=raw):
                self.assertIsNone(parse_read_at(raw))


class TestParseAccountId(unittest.TestCase):
    def test_accepts_integers(self) -> None:
        self.assertEqual(parse_account_id("2344"), 2344)
        self.assertEqual(parse_account_id(" 2344 "), 2344)

    def test_rejects_non_integers(self) -> None:
        for raw in ("abc", "", "12.5", "1_000", "2344a"):
            with self.subTest(raw=raw):
                self.assertIsNone(parse_account_id(raw))

    def test_rejects_ids_outside_32_bit_range(self) -> None:
        self.assertEqual(parse_account_id("2147483647"), 2147483647)
        self.assertEqual(parse_account_id("-2147483648"), -2147483648)
        for raw in ("2147483648", "-2147483649", "99999999999999999999"):
            with self.subTest(raw=raw):
                self.assertIsNone(parse_account_id(raw))


class TestMeterReadingCSVParser(unittest.TestCase):
    def setUp(self) -> None:
        self.parser = MeterReadingCSVParser()

    def _parse(self, payload: bytes):
        return self.parser.parse(io.BytesIO(payload))

    def test_converts_valid_rows(self) -> None:
        result = self._parse(
            make_csv("2344,22/04/2019 09:24,10022,", "2233,22/04/2019 12:25,32322,")
        )

        self.assertIsNone(result.error)
        self.assertEqual(len(result.valid), 2)
        self.assertEqual(result.invalid, ())
        first = result.valid[0]
        self.assertEqual(first.account_id, 2344)
        self.assertEqual(first.read_at, datetime(2019, 4, 22, 9, 24))
        self.assertEqual(first.read_value, "10022")
        self.assertEqual(first.row_number, 2)

    def test_non_numeric_account_is_a_row_error(self) -> None:
        result = self._parse(make_csv("abc,22/04/2019 09:24,10022,"))

        self.assertIsNone(result.error)
        self.assertEqual(result.valid, ())
        self.assertEqual(len(result.invalid), 1)
        self.assertEqual(result.invalid[0].text, "abc")
        self.assertEqual(result.invalid[0].column, ACCOUNT_ID_COLUMN)
        self.assertEqual(result.invalid[0].row_number, 2)

    def test_oversized_account_is_a_row_error(self) -> None:
        result = self._parse(
            make_csv(
                "2147483648,22/04/2019 09:24,10022,",
                "99999999999999999999,22/04/2019 09:24,10022,",
            )
        )

        self.assertIsNone(result.error)
        self.assertEqual(result.valid, ())
        self.assertEqual(
            [(e.text, e.column, e.row_number) for e in result.invalid],
            [
                ("2147483648", ACCOUNT_ID_COLUMN, 2),
                ("99999999999999999999", ACCOUNT_ID_COLUMN, 3),
            ],
        )

    def test_bad_datetime_is_a_row_error(self) -> None:
        result = self._parse(make_csv("2344,abc,10022,"))

        self.assertIsNone(result.error)
        self.assertEqual(result.valid, ())
        self.assertEqual(len(result.invalid), 1)
        self.assertEqual(result.invalid[0].column, READ_AT_COLUMN)

    def test_mixed_rows_continue_past_bad_row(self) -> None:
        result = self._parse(
            make_csv(
                "2344,22/04/2019 09:24,10022,",
                "account,22/04/2019 12:25,32322,",
                "2233,22/04/2019 12:25,32322,",
            )
        )

        self.assertEqual([r.account_id for r in result.valid], [2344, 2233])
        self.assertEqual(len(result.invalid), 1)
        self.assertEqual(result.invalid[0].row_number, 3)

    def test_row_with_two_bad_fields_counts_once(self) -> None:
        result = self._parse(make_csv("abc,not-a-date,10022,"))

        self.assertEqual(len(result.invalid), 1)

    def test_reading_value_is_kept_verbatim(self) -> None:
        result = self._parse(make_csv("2344,22/04/2019 09:24, 1002,", "2344,22/04/2019 09:25,,"))

        self.assertEqual([r.read_value for r in result.valid], [" 1002", ""])

    def test_truncated_row_is_fatal(self) -> None:
        result = self._parse(make_csv("2344,22/04/2019 09:24"))

        self.assertIsNotNone(result.error)
        self.assertIsNone(result.valid)
        self.assertIsNone(result.invalid)
        self.assertEqual(result.malformed_count, 0)

    def test_missing_required_column_is_fatal(self) -> None:
        result = self._parse(make_csv("2344,22/04/2019 09:24", header="AccountId,MeterReadingDateTime"))

        self.assertIn("MeterReadValue", result.error)

    def test_empty_and_header_only_streams(self) -> None:
        self.assertIsNotNone(self._parse(b"").error)

        header_only = self._parse(make_csv())
        self.assertIsNone(header_only.error)
        self.assertEqual(header_only.valid, ())
        self.assertEqual(header_only.invalid, ())

    def test_columns_found_by_name_in_any_order(self) -> None:
        result = self._parse(
            make_csv(
                "10022,2344,22/04/2019 09:24",
                header="meterreadvalue, AccountId ,MeterReadingDateTime",
            )
        )

        self.assertEqual(result.valid[0].account_id, 2344)
        self.assertEqual(result.valid[0].read_value, "10022")

    def test_blank_lines_skipped_and_empty_rows_rejected(self) -> None:
        result = self._parse(make_csv("", "2344,22/04/2019 09:24,10022,", ",,,"))

        self.assertEqual(len(result.valid), 1)
        self.assertEqual(len(result.invalid), 1)
        self.assertEqual(result.invalid[0].text, EMPTY_ROW_MESSAGE)

    def test_utf8_bom_is_accepted(self) -> None:
        result = self._parse(b"\xef\xbb\xbf" + make_csv("2344,22/04/2019 09:24,10022,"))

        self.assertEqual(len(result.valid), 1)

    def test_non_utf8_stream_is_fatal(self) -> None:
        result = self._parse(make_csv() + b"\n\xff\xfe,22/04/2019 09:24,10022,")

        self.assertEqual(result.error, "CSV must be UTF-8 encoded.")


if __name__ == "__main__":
    unittest.main()
