# Israeli Tax Constants (2025-2027)

# Surtax (Yesef) threshold on annual income
SURTAX_THRESHOLD = 721560
SURTAX_RATE = 0.03

# Employer + employee pension deposits as a share of gross salary
PENSION_CONTRIBUTION_RATE = 0.20

# Annuity conversion at 60+
FIXED_COEFFICIENT = 210
FIXED_PENSION_TAX = 0.15

# Brackets are (up_to, rate) pairs, ascending. The last ceiling is open-ended.

# Income from employment (personal exertion)
EMPLOYMENT_TAX_BRACKETS = [
    (84120,        0.10),
    (120720,       0.14),
    (193800,       0.20),
    (269280,       0.31),
    (560280,       0.35),
    (721560,       0.47),
    (float('inf'), 0.50)  # 47% + 3% surtax
]

# Lowest rate on pension withdrawn before 60
EARLY_PENSION_PENALTY_TAX = 0.31

# Income NOT from employment, before age 60 (early pension withdrawal)
NON_EMPLOYMENT_TAX_BRACKETS = [
    (269280,       EARLY_PENSION_PENALTY_TAX),
    (560280,       0.35),
    (721560,       0.47),
    (float('inf'), 0.52)  # 47% + 3% surtax + 2% extra
]

# Capital Gains
# 25% base, +3% surtax above the threshold, +2% more above 5M
CAPITAL_GAINS_BASE_RATE = 0.25
CAPITAL_GAINS_TAX_BRACKETS = [
    (SURTAX_THRESHOLD, 0.25),
    (5000000,          0.28),
    (float('inf'),     0.30)
]
