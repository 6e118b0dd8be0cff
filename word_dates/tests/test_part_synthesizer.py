from __future__ import annotations

import unittest
import xml.etree.ElementTree as ET

from word_dates.logic.part_synthesizer import EP_NS, default_app_xml

EP = f"{{{EP_NS}}}"


class TestDefaultAppXml(unittest.TestCase):
    def test_well_formed_with_last_printed(self) -> None:
        data = default_app_xml("2023-01-01T12:00:00Z")
        self.assertTrue(data.startswith(b'<?xml version="1.0" encoding="UTF-8"'))
        root = ET.fromstring(data)
        self.assertEqual(root.tag, f"{EP}Properties")
        self.assertEqual(root.find(f"{EP}Application").text, "Microsoft Office Word")
        self.assertEqual(root.find(f"{EP}LastPrinted").text, "2023-01-01T12:00:00Z")

    def test_empty_value_omits_element(self) -> None:
        root = ET.fromstring(default_app_xml(""))
        self.assertIsNone(root.find(f"{EP}LastPrinted"))
        self.assertIsNotNone(root.find(f"{EP}Application"))

    def test_application_override_is_escaped(self) -> None:
        root = ET.fromstring(default_app_xml("2023-01-01T12:00:00Z", application="Docs & Co"))
        self.assertEqual(root.find(f"{EP}Application").text, "Docs & Co")


if __name__ == "__main__":
    unittest.main()
