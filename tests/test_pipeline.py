from __future__ import annotations

import json
import tempfile
import zipfile
from datetime import timedelta
from pathlib import Path
import unittest

from reportsuite import config
from reportsuite.models import JobStatus, ReportJob, reset_engine
from reportsuite.pipeline.ingest import ingest_requests, list_jobs, load_requests, slug_from_title
from reportsuite.pipeline.package import create_bundle, create_readme
from reportsuite.pipeline.render import build_report


class PipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        config.set_out_dir(self.root / "out")
        reset_engine()

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def _write(self, payload) -> Path:
        path = self.root / "requests.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_slug_generation(self) -> None:
        self.assertEqual(slug_from_title("Home Loan Appraisal"), "home-loan-appraisal")

    def test_missing_request_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_requests(self.root / "nope.json")

    def test_invalid_json(self) -> None:
        path = self.root / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_requests(path)

    def test_requests_need_kind_and_title(self) -> None:
        with self.assertRaises(ValueError):
            load_requests(self._write([{"title": "No kind"}]))
        with self.assertRaises(ValueError):
            load_requests(self._write([]))

    def test_wrapped_report_list(self) -> None:
        requests = load_requests(self._write({"reports": [{"kind": "generic", "title": "A"}]}))
        self.assertEqual(len(requests), 1)

    def test_unknown_kind_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ingest_requests(self._write([{"kind": "ledger", "title": "Odd"}]))

    def test_duplicate_title_per_kind_rejected(self) -> None:
        payload = [
            {"kind": "generic", "title": "Review"},
            {"kind": "generic", "title": "review"},
        ]
        with self.assertRaises(ValueError):
            ingest_requests(self._write(payload))

    def test_same_title_different_kind_allowed(self) -> None:
        payload = [
            {"kind": "generic", "title": "Review"},
            {"kind": "amortization", "title": "Review", "loan": {"principal": 1000, "annual_rate": 10, "tenure_months": 6}},
        ]
        jobs = ingest_requests(self._write(payload))
        self.assertEqual(len(jobs), 2)
        self.assertTrue(all(job.status == JobStatus.DRAFT for job in jobs))
        self.assertEqual(len(list_jobs([JobStatus.DRAFT], kind="amortization")), 1)

    def test_ingest_normalizes_kind(self) -> None:
        (job,) = ingest_requests(self._write([{"kind": " SHG ", "title": "  Group Review "}]))
        self.assertEqual(job.kind, "shg")
        self.assertEqual(job.title, "Group Review")
        self.assertEqual(job.request()["kind"], "shg")

    def test_build_report_unknown_kind(self) -> None:
        with self.assertRaises(ValueError):
            build_report({"kind": "other", "title": "x"}, None)

    def test_build_amortization_from_loan_terms(self) -> None:
        request = {
            "kind": "amortization",
            "title": "Car Loan",
            "loan": {"principal": 500000, "annual_rate": 9.5, "tenure_months": 48, "method": "reducing"},
        }
        surface = build_report(request, self.root / "car.pdf")
        self.assertTrue((self.root / "car.pdf").exists())
        self.assertGreaterEqual(surface.page_count, 2)

    def test_bundle_contents(self) -> None:
        work = self.root / "work"
        work.mkdir()
        pdf = work / "report.pdf"
        build_report({"kind": "generic", "title": "Bundle"}, pdf)
        request = work / "request.json"
        request.write_text("{}", encoding="utf-8")
        readme = create_readme(work / "README.txt", "Bundle", 1)
        self.assertIn("1 page(s)", readme.read_text(encoding="utf-8"))
        bundle = create_bundle(work / "bundle.zip", [pdf, request, readme])
        with zipfile.ZipFile(bundle) as archive:
            self.assertEqual(archive.namelist(), ["report.pdf", "request.json", "README.txt"])

    def test_bundle_missing_input(self) -> None:
        work = self.root / "work"
        work.mkdir()
        with self.assertRaises(FileNotFoundError):
            create_bundle(work / "bundle.zip", [work / "report.pdf", work / "request.json"])
        self.assertFalse((work / "bundle.zip").exists())

    def test_new_jobs_carry_aware_timestamps(self) -> None:
        job = ReportJob(kind="generic", title="Stamp", slug="stamp")
        self.assertIsNotNone(job.created_at.tzinfo)
        self.assertEqual(job.created_at.utcoffset(), timedelta(0))

    def test_ingest_persists_jobs(self) -> None:
        (job,) = ingest_requests(self._write([{"kind": "generic", "title": "A"}]))
        self.assertIsNotNone(job.id)
        self.assertEqual([j.slug for j in list_jobs([JobStatus.DRAFT])], ["a"])


if __name__ == "__main__":
    unittest.main()
