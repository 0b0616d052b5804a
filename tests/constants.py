APP_ID = 8_000

PLAIN_ASSET_ID = 12345
TAXED_ASSET_ID = 78910
SECOND_TAXED_ASSET_ID = 1112131
