from typing import List

import pandas as pd

from config import CONFIG
from meal_extender import Meal

# ====================================================================

def generate_meals() -> List[Meal]:
    return [
        Meal("Beef Stroganoff", 3),
        Meal("PB&J", 1),
        Meal("Ham Sandwich", 2),
        Meal("Hamburger", 2),
        Meal("Bacon, Eggs, Toast", 3),
        Meal("Arroz con Pollo", 4),
        Meal("Scrambled Eggs", 1),
    ]

def normalize_name(cell) -> str:
    if cell is None or pd.isna(cell):
        return ""
    return str(cell).strip()

def meals_from_frame(df: pd.DataFrame) -> List[Meal]:
    needed = CONFIG["required_columns"]
    missing = [c for c in needed if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns: {missing}")
    # unparseable, fractional or infinite tolerances become 0 so the extender rejects them
    raw = pd.to_numeric(df["tolerance"], errors="coerce")
    tolerances = raw.where(raw % 1 == 0, 0).astype(int)
    return [Meal(normalize_name(name), int(tol))
            for name, tol in zip(df["name"], tolerances)]

def load_meals(csv_path: str) -> List[Meal]:
    df = pd.read_csv(csv_path)
    df.columns = [str(c).strip().lower() for c in df.columns]
    return meals_from_frame(df)
