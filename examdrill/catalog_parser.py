import pandas as pd
import json
from typing import List, Dict, Any, Optional
from pathlib import Path

class QuestionCatalogParser:
    """
    Parse question catalog tables (CSV / Excel) into question dicts.
    Expected columns: text, category, difficulty, options, correct_answers,
    explanation, is_public. Only text and category are required.
    """

    @staticmethod
    def parse_csv_table(file_path: str) -> List[Dict[str, Any]]:
        """Parse CSV format question table"""
        return QuestionCatalogParser._parse_frame(pd.read_csv(file_path))

    @staticmethod
    def parse_excel_table(file_path: str) -> List[Dict[str, Any]]:
        """Parse Excel format question table"""
        return QuestionCatalogParser._parse_frame(pd.read_excel(file_path))

    @staticmethod
    def _parse_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
        # Normalize column names
        df.columns = df.columns.str.strip().str.lower()

        questions = []
        for _, row in df.iterrows():
            text = QuestionCatalogParser._clean(row.get("text"))
            category = QuestionCatalogParser._clean(row.get("category"))

            # Skip rows with missing essential data
            if not text or not category:
                continue

            questions.append({
                "text": text,
                "category": category,
                "difficulty": (QuestionCatalogParser._clean(row.get("difficulty")) or "medium").lower(),
                "options": QuestionCatalogParser._parse_options(row.get("options")),
                "correct_answers": QuestionCatalogParser._parse_answers(row.get("correct_answers")),
                "explanation": QuestionCatalogParser._clean(row.get("explanation")),
                "is_public": QuestionCatalogParser._parse_bool(row.get("is_public"), default=True),
            })

        return questions

    @staticmethod
    def _clean(value: Any) -> Optional[str]:
        """Stringify a cell, mapping empty/NaN cells to None"""
        if value is None or pd.isna(value):
            return None
        value = str(value).strip()
        return value or None

    @staticmethod
    def _parse_options(value: Any) -> List[Dict[str, str]]:
        """
        Parse answer options.
        Accepts a JSON list of {"label", "text"} objects or "A: text | B: text".
        """
        raw = QuestionCatalogParser._clean(value)
        if not raw:
            return []

        if raw.startswith("["):
            return json.loads(raw)

        options = []
        for part in raw.split("|"):
            label, sep, text = part.partition(":")
            if not sep:
                raise ValueError(f"Option '{part.strip()}' must look like 'A: text'")
            options.append({"label": label.strip(), "text": text.strip()})
        return options

    @staticmethod
    def _parse_answers(value: Any) -> List[str]:
        """Parse answer key labels like "A" or "A, C" """
        raw = QuestionCatalogParser._clean(value)
        if not raw:
            return []
        return [label.strip() for label in raw.split(",") if label.strip()]

    @staticmethod
    def _parse_bool(value: Any, default: bool) -> bool:
        raw = QuestionCatalogParser._clean(value)
        if raw is None:
            return default
        return raw.lower() in ("1", "true", "yes", "y")

    @staticmethod
    def auto_parse(file_path: str) -> List[Dict[str, Any]]:
        """
        Automatically detect file type and parse accordingly.
        Supports: CSV, Excel (xlsx, xls)
        """
        file_ext = Path(file_path).suffix.lower()

        if file_ext == ".csv":
            return QuestionCatalogParser.parse_csv_table(file_path)
        elif file_ext in [".xlsx", ".xls"]:
            return QuestionCatalogParser.parse_excel_table(file_path)
        else:
            raise ValueError(f"Unsupported file format: {file_ext}. Use .csv or .xlsx")
