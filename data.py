# data.py
# -*- coding: utf-8 -*-
"""
Demo report data for running the dashboard without a hosted backend.
"""

import os

import pandas as pd

from config import cfg, log

DEMO_REPORTS = [
    {
        "id": 1,
        "address": "123 Main St",
        "leak_type": "Burst Pipe",
        "created_at": "2025-06-07T10:00:00Z",
        "resolved": False,
        "district": "District A",
        "Description": "Severe water burst",
    },
    {
        "id": 2,
        "address": "456 Park Ave",
        "leak_type": "Minor Leak",
        "created_at": "2025-06-06T14:30:00Z",
        "resolved": True,
        "district": "District B",
        "Description": "Dripping tap",
    },
    {
        "id": 3,
        "address": "78 River Rd",
        "leak_type": "Broken Valve",
        "created_at": "2025-06-05T08:15:00Z",
        "resolved": False,
        "district": "District A",
        "Description": "Valve stuck open at hydrant",
    },
    {
        "id": 4,
        "address": "9 Hill Crescent",
        "leak_type": "Small Leak",
        "created_at": "2025-06-04T19:45:00Z",
        "resolved": False,
        "district": "District C",
        "Description": None,
    },
    {
        "id": 5,
        "address": "210 Harbour Blvd",
        "leak_type": "Moderate Leak",
        "created_at": "2025-06-03T11:20:00Z",
        "resolved": True,
        "district": "District B",
        "Description": "Pooling water near meter box",
    },
]


def load_demo_reports(path=None):
    """Load demo records from a CSV file, falling back to the built-in set."""
    path = path or cfg.get("demo_data_path")
    if not path:
        return [dict(r) for r in DEMO_REPORTS]
    if not os.path.exists(path):
        log.warning(f"Demo data file {path} not found. Using built-in demo reports.")
        return [dict(r) for r in DEMO_REPORTS]

    df = pd.read_csv(path, dtype={"created_at": str})
    if "resolved" in df:
        df["resolved"] = (
            df["resolved"].astype(str).str.strip().str.lower().isin(["true", "1", "yes"])
        )
    # NaN -> None so optional text columns stay optional
    df = df.astype(object).where(pd.notna(df), None)
    records = df.to_dict(orient="records")
    log.info(f"Loaded {len(records)} demo reports from {path}")
    return records
