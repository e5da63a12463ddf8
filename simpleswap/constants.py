"""Pool constants."""

# Fixed-point scale for prices returned by get_price (1e18)
PRICE_SCALE = 10**18

# A two-asset pool swaps along exactly [input, output]
SWAP_PATH_LENGTH = 2

# Claim-token metadata
CLAIM_TOKEN_SYMBOL = "SSLP"
CLAIM_TOKEN_DECIMALS = 18
