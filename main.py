#!/usr/bin/env python3
"""
Main script for replaying observations through the online regression engine.
"""

# Pipeline overview:
# 1) Load x, y and optional y standard deviations from a CSV file.
# 2) Add each observation to a LinearRegression, removing the oldest one when
#    a moving window is requested.
# 3) Export the snapshot history and final observations as CSV tables.
# 4) Draw the final fit and the slope / R^2 history.

import logging
import os
import sys
import time

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from onlinefit.replay import main as replay_main


def main():
    """Run the replay CLI and report its duration."""
    start_time = time.time()
    logging.info("Initializing regression replay")
    status = replay_main()
    logging.info("Total execution time: %.2f seconds", time.time() - start_time)
    return status


if __name__ == "__main__":
    sys.exit(main())
