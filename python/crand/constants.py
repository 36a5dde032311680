"""Frozen word widths and generator constants for the crand engines."""

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# PCG32 LCG multiplier and the default stream of the published reference.
PCG32_MULT = 6364136223846793005
DEFAULT_SEQ32 = 0xDA3E39CB94B95BDB >> 1

# Weyl engine: output mix rotation/shift amounts.
WEYL_ROTATE = 24
WEYL_RSHIFT = 11
WEYL_LSHIFT = 3
WEYL_WARMUP_ROUNDS = 6

# Seeding offsets spread a small seed across the three generator words.
WEYL_SEED_ADD0 = 0x26AA069EA2FB1A4D
WEYL_SEED_MUL1 = 0x9E3779B97F4A7C15
WEYL_SEED_ADD2 = 0xD4ACBB2D30D1FA8F
# Fraction bits of sqrt(2); default stream for Engine64.init.
DEFAULT_SEQ64 = 0x3504F333D3AA0B37

UNIT_F32 = 1.0 / (1 << 24)
UNIT_F64 = 1.0 / (1 << 53)
