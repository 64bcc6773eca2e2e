# ========================== CONFIGURATION ==========================

CONFIG = {
    # --- Demo run ---
    "target_length": 16,        # slots in the extended sequence
    "sort_by_tolerance": True,  # place long-tolerance meals first
    "strategy": "spread",       # "spread" = tolerance spacing, "cycle" = plain repetition

    # --- Placeholder used for slots no meal could claim ---
    "placeholder_name": "",
    "placeholder_tolerance": 0,

    # --- Required columns in meals.csv ---
    "required_columns": ["name", "tolerance"],
}
# ===================================================================
