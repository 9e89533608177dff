import logging

import pandas as pd

_LOGGER = logging.getLogger(__name__)


def load_scenarios(filepath: str):
    """
    Reads one building/absence per row. Column names are BuildingInputs fields
    (or the app's camelCase aliases); blank cells fall back to defaults.
    An optional 'name' column labels each row.

    Returns (names, list of raw input dicts).
    """
    print(f"Loading scenarios from {filepath}...")
    df = pd.read_csv(filepath, dtype={'zip_code': str, 'zipCode': str})

    if 'name' in df.columns:
        names = df['name'].astype(str).tolist()
        df = df.drop(columns=['name'])
    else:
        names = [f"row_{i}" for i in range(len(df))]

    rows = []
    for _, row in df.iterrows():
        # Blank cells arrive as NaN; drop them so defaults apply
        rows.append({k: v for k, v in row.items() if not pd.isna(v)})

    print(f"Successfully loaded {len(rows)} scenarios.")
    return names, rows
