#!/usr/bin/env python3

"""
Migration script to normalize stored reaction types
This script:
1. Scans every reaction row in batches
2. Rewrites enum tokens such as "HEART" to the canonical label "Heart"
"""

import argparse
import os
import sys
import logging

# Add parent directory to path to import app modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.session import SessionLocal
from app.modules.reactions.services.migration import fix_reaction_case

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def run_migration(batch_size: int, dry_run: bool):
    """Run the reaction case migration"""
    logger.info("Starting reaction case fix...")

    # Create a database session
    db = SessionLocal()

    try:
        stats = fix_reaction_case(db, batch_size=batch_size, dry_run=dry_run)
        logger.info(
            f"Scanned {stats['scanned']} reactions, updated {stats['updated']}, "
            f"{stats['unknown']} with unknown types"
        )
        if dry_run:
            logger.info("Dry run, no changes written")
        else:
            logger.info("Migration completed successfully!")
    except Exception as e:
        logger.error(f"Migration failed: {e}")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Normalize stored reaction types")
    parser.add_argument("--batch-size", type=int, default=500, help="Rows per batch (default: 500)")
    parser.add_argument("--dry-run", action="store_true", help="Report changes without writing them")
    args = parser.parse_args()
    run_migration(args.batch_size, args.dry_run)
