# ABOUTME: Validates loading and exporting observation records in camelCase JSON.
# ABOUTME: Ensures malformed records are rejected at the boundary with their position.

import json
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from src.observation_analytics.records import (
    ObservationFormatError,
    dump_observations,
    load_observations,
    parse_observations,
    to_frame,
    to_rows,
)
from src.observation_analytics.schemas import CategoryScore, ObservationRecord, TrendData


class ObservationRecordsTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _write(self, rows) -> Path:
        path = self.root / "observations.json"
        path.write_text(json.dumps(rows), encoding="utf-8")
        return path

    def _row(self, **overrides):
        row = {
            "id": "obs-1",
            "studentId": "2",
            "studentName": "Mike Chen",
            "timestamp": "2024-05-06T09:30:00.000Z",
            "observation": "Needs guidance for social interactions",
            "tags": ["Needs Help", "Teamwork"],
            "categories": [{"category": "Social Skills", "score": 2.1, "isAutoSuggested": True}],
        }
        row.update(overrides)
        return row

    def test_load_observations_parses_web_app_export(self) -> None:
        (record,) = load_observations(self._write([self._row()]))

        self.assertEqual(record.id, "obs-1")
        self.assertEqual(record.student_id, "2")
        self.assertEqual(record.timestamp, datetime(2024, 5, 6, 9, 30, tzinfo=timezone.utc))
        self.assertEqual(record.categories, (CategoryScore("Social Skills", 2.1, True),))
        self.assertEqual(record.tags, ("Needs Help", "Teamwork"))

    def test_missing_categories_mean_no_scores(self) -> None:
        row = self._row()
        del row["categories"]
        (record,) = parse_observations([row])
        self.assertEqual(record.categories, ())

    def test_missing_required_field_names_position(self) -> None:
        with self.assertRaisesRegex(ObservationFormatError, r"#1 is missing: studentId"):
            parse_observations([self._row(), self._row(studentId="")])

    def test_out_of_scale_score_rejected(self) -> None:
        row = self._row(categories=[{"category": "Creativity", "score": 6}])
        with self.assertRaisesRegex(ObservationFormatError, "outside 1-5"):
            parse_observations([row])

    def test_bad_timestamp_rejected(self) -> None:
        with self.assertRaises(ObservationFormatError):
            parse_observations([self._row(timestamp="not a date")])

    def test_relative_and_missing_time_words_rejected(self) -> None:
        for value in ("now", "today", "NaT", "2024-02-30T10:00:00Z", 1714987800):
            with self.subTest(value=value):
                with self.assertRaisesRegex(ObservationFormatError, "unparseable timestamp"):
                    parse_observations([self._row(timestamp=value)])

    def test_naive_iso_timestamp_stays_naive(self) -> None:
        (record,) = parse_observations([self._row(timestamp="2024-03-10T02:30:00")])
        self.assertEqual(record.timestamp, datetime(2024, 3, 10, 2, 30))

    def test_non_list_file_rejected(self) -> None:
        with self.assertRaises(ObservationFormatError):
            load_observations(self._write({"observations": []}))

    def test_unknown_categories_are_kept(self) -> None:
        row = self._row(categories=[{"category": "Handwriting", "score": 3}])
        (record,) = parse_observations([row])
        self.assertEqual(record.categories[0].category, "Handwriting")

    def test_dump_then_load_preserves_records(self) -> None:
        original = ObservationRecord(
            id="a",
            student_id="1",
            student_name="Sarah Johnson",
            timestamp=datetime(2024, 5, 6, 9, 30, tzinfo=timezone.utc),
            categories=(CategoryScore("Creativity", 4.1, False),),
            tags=("Excellent",),
        )
        path = self.root / "out" / "records.json"
        dump_observations([original], path)

        raw = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(raw[0]["studentName"], "Sarah Johnson")
        self.assertEqual(raw[0]["categories"][0]["isAutoSuggested"], False)
        self.assertEqual(load_observations(path), [original])

    def test_to_rows_keeps_category_names_as_keys(self) -> None:
        trend = TrendData(period="2024-W02", scores={"Social Skills": 3.0}, total_observations=1, granularity="week")

        (row,) = to_rows([trend])
        self.assertEqual(
            row,
            {"period": "2024-W02", "scores": {"Social Skills": 3.0}, "totalObservations": 1, "granularity": "week"},
        )
        self.assertEqual(list(to_frame([trend]).columns), ["period", "scores", "total_observations", "granularity"])


if __name__ == "__main__":
    unittest.main()
