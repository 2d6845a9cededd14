"""Redis adapter constants."""

SCAN_BATCH_SIZE = 100
