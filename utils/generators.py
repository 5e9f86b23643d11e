"""
Utility functions for generating sample assignment files.
"""
import csv
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from faker import Faker

from config import AppConfig
from models import FixedDate
from parsing.dates import DateNormalizer
from utils.logger import logger


class DataGenerator:
    """Generator for sample employee-project assignment data."""

    def __init__(
        self,
        seed: int = 42,
        config: Optional[Dict[str, Any]] = None,
        app_config: Optional[AppConfig] = None,
    ):
        """
        Initialize the generator with a specific seed and optional configuration.

        Args:
            seed: Random seed for reproducibility
            config: Optional generation settings
            app_config: Application configuration (column names, date formats)
        """
        self.seed = seed
        self.fake = Faker()
        self.fake.seed_instance(seed)
        self.app_config = app_config or AppConfig()
        self.normalizer = DateNormalizer.from_config(self.app_config.date)

        self.config = config or {
            "num_employees": 12,
            "num_projects": 5,
            "first_employee_id": 101,
            "first_project_id": 1,
            "start_date_min": date(2018, 1, 1),
            "start_date_max": date(2024, 12, 31),
            "duration_days_min": 14,
            "duration_days_max": 900,
            "ongoing_ratio": 0.15,  # share of assignments without an end date
            "mixed_formats": True,
        }

    def _random_date(self) -> date:
        return self.fake.date_between_dates(
            date_start=self.config["start_date_min"],
            date_end=self.config["start_date_max"],
        )

    def render_date(self, value: date) -> str:
        """
        Render a date in a randomly chosen supported format.

        Renderings that the normalizer would read back as a different date
        (e.g. 03/04/2020 as day-first) fall back to ISO.
        """
        if not self.config.get("mixed_formats", True):
            return value.isoformat()

        fmt = self.fake.random.choice(self.normalizer.formats)
        text = value.strftime(fmt)
        if self.normalizer.normalize(text) == FixedDate(value):
            return text
        return value.isoformat()

    def generate_rows(self, num_rows: int) -> List[Dict[str, str]]:
        """
        Generate assignment rows keyed by the configured column names.

        Args:
            num_rows: Number of rows to generate

        Returns:
            List[Dict[str, str]]: Rows ready to be written as CSV
        """
        cols = self.app_config.loader
        first_emp = self.config["first_employee_id"]
        first_proj = self.config["first_project_id"]
        names = {
            first_emp + i: self.fake.name() for i in range(self.config["num_employees"])
        }

        rows = []
        ongoing = 0
        for _ in range(num_rows):
            emp_id = self.fake.random_int(
                min=first_emp, max=first_emp + self.config["num_employees"] - 1
            )
            project_id = self.fake.random_int(
                min=first_proj, max=first_proj + self.config["num_projects"] - 1
            )
            start = self._random_date()

            if self.fake.random.random() < self.config["ongoing_ratio"]:
                end_text = self.fake.random.choice(
                    [self.app_config.date.null_token, ""]
                )
                ongoing += 1
            else:
                end = start + timedelta(
                    days=self.fake.random_int(
                        min=self.config["duration_days_min"],
                        max=self.config["duration_days_max"],
                    )
                )
                end_text = self.render_date(end)

            rows.append({
                cols.employee_column: str(emp_id),
                cols.project_column: str(project_id),
                cols.date_from_column: self.render_date(start),
                cols.date_to_column: end_text,
                "Name": names[emp_id],
            })

        logger.info(f"Generated {len(rows)} assignment rows, {ongoing} ongoing.")
        return rows

    def write_csv(self, file_path: str, num_rows: int = 50) -> str:
        """
        Write a generated sample to a CSV file.

        Args:
            file_path: Destination path
            num_rows: Number of rows to generate

        Returns:
            str: The path written
        """
        cols = self.app_config.loader
        fieldnames = cols.required_columns + ["Name"]
        rows = self.generate_rows(num_rows)

        with open(file_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter=cols.delimiter)
            writer.writeheader()
            writer.writerows(rows)

        logger.info(f"Sample assignments written to {file_path}")
        return file_path
