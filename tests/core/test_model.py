import unittest

from cargo_review.core.model import Audit, DependencyRecord

AUDIT_OUTPUT = {
    "database": {"advisory-count": 600},
    "lockfile": {"dependency-count": 42},
    "vulnerabilities": {
        "found": True,
        "count": 1,
        "list": [
            {
                "advisory": {
                    "id": "RUSTSEC-2024-0001",
                    "package": "vuln",
                    "title": "Memory corruption",
                    "description": "Bad things happen.",
                    "date": "2024-01-01",
                    "aliases": ["CVE-2024-0001"],
                    "url": None,
                    "cvss": None,
                },
                "versions": {"patched": [">=1.1"]},
                "package": {"name": "vuln", "version": "1.0.0", "source": "registry"},
            }
        ],
    },
    "warnings": {},
}


class TestAuditModel(unittest.TestCase):

    def test_from_cargo_audit_output(self):
        audit = Audit.from_dict(AUDIT_OUTPUT)

        self.assertTrue(audit.found)
        self.assertEqual(audit.dependency_count, 42)
        self.assertEqual(len(audit.vulnerabilities), 1)

        vuln = audit.vulnerabilities[0]
        self.assertEqual(vuln.advisory.id, "RUSTSEC-2024-0001")
        self.assertEqual(vuln.advisory.title, "Memory corruption")
        self.assertEqual(vuln.package.name, "vuln")
        self.assertEqual(vuln.package.version, "1.0.0")
        self.assertFalse(hasattr(vuln.advisory, "aliases"))

    def test_clean_audit(self):
        audit = Audit.from_dict({"vulnerabilities": {"found": False, "count": 0, "list": []}})

        self.assertFalse(audit.found)
        self.assertEqual(audit.vulnerabilities, [])


class TestDependencyRecord(unittest.TestCase):

    def test_from_metadata_package(self):
        record = DependencyRecord.from_dict({
            "name": "mid",
            "version": "1.0.0",
            "dependencies": [{"name": "vuln", "req": "^1"}, {"name": "serde", "kind": "dev"}],
        })

        self.assertEqual(record.name, "mid")
        self.assertEqual(record.dependencies, ["vuln", "serde"])
