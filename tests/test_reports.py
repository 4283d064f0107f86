import os
import shutil
import tempfile
import unittest

import openpyxl

from hotel_cli.reports import build_excel, build_pdf


class TestReports(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.test_dir)
        self.labels = ["hotelid", "roomnumber", "price", "bookingdate"]
        self.rows = [["1", "101", "120", "05/01/2024"], ["1", "102", "95", "05/02/2024"]]

    def test_excel(self):
        path = os.path.join(self.test_dir, "bookings.xlsx")
        build_excel("Bookings", self.labels, self.rows, path)

        ws = openpyxl.load_workbook(path).active
        self.assertEqual(ws.title, "Bookings")
        values = [list(row) for row in ws.iter_rows(values_only=True)]
        self.assertEqual(values, [self.labels] + self.rows)

    def test_excel_clips_long_title(self):
        path = os.path.join(self.test_dir, "long.xlsx")
        build_excel("Booking history of every managed hotel", self.labels, [], path)

        ws = openpyxl.load_workbook(path).active
        self.assertEqual(len(ws.title), 31)

    def test_pdf(self):
        path = os.path.join(self.test_dir, "bookings.pdf")
        # enough rows to spill onto a second page
        build_pdf("Hotel booking history", self.labels, self.rows * 40, path)

        with open(path, "rb") as fh:
            self.assertEqual(fh.read(4), b"%PDF")


if __name__ == "__main__":
    unittest.main()
