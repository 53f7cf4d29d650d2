"""Tests for loggio/report.py"""

import json
import os
import unittest

from loggio.client import LoggIO
from loggio.report import Report, build_report, format_report_json, format_report_text

SAMPLE_LOG = os.path.join(os.path.dirname(__file__), "..", "logs", "sample.log")


class TestBuildReport(unittest.TestCase):
    def setUp(self):
        self.loggio = LoggIO().read(SAMPLE_LOG, blocking=True)

    def test_sample_report(self):
        report = build_report(self.loggio, top=2)
        self.assertEqual(report.total_records, 8)
        self.assertEqual(report.unique_ips, 4)
        self.assertEqual(report.most_visited_urls, ["/most-visited", "/second-most-visited"])
        self.assertEqual(report.most_active_ips, ["168.41.191.9", "177.71.128.21"])

    def test_top_larger_than_distinct_values(self):
        report = build_report(self.loggio, top=10)
        self.assertEqual(len(report.most_active_ips), 4)
        self.assertEqual(len(report.most_visited_urls), 4)

    def test_empty_instance(self):
        report = build_report(LoggIO())
        self.assertEqual(report, Report())


class TestFormatReport(unittest.TestCase):
    def setUp(self):
        self.report = Report(
            total_records=3,
            unique_ips=2,
            most_visited_urls=["/a", "/b"],
            most_active_ips=["10.0.0.1"],
        )

    def test_text_sections(self):
        text = format_report_text(self.report)
        self.assertIn("# Number of unique IP addresses:\n2", text)
        self.assertIn("# Top 2 most visited URLs:\n/a\n/b", text)
        self.assertIn("# Top 1 most active IP addresses:\n10.0.0.1", text)

    def test_json(self):
        parsed = json.loads(format_report_json(self.report))
        self.assertEqual(parsed["unique_ips"], 2)
        self.assertEqual(parsed["most_visited_urls"], ["/a", "/b"])


if __name__ == "__main__":
    unittest.main()
