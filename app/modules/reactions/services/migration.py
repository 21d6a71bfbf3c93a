"""
One-off normalization of stored reaction types.

Rows written before reaction types were normalized may hold the enum token
("HEART") instead of the canonical label ("Heart"). The runtime ledger
tolerates both on read; this pass rewrites them so it no longer has to.
"""
import logging
from typing import Dict

from sqlalchemy.orm import Session

from app.modules.reactions.models.reaction import Reaction, normalize_reaction_type

logger = logging.getLogger(__name__)

def fix_reaction_case(db: Session, batch_size: int = 500, dry_run: bool = False) -> Dict[str, int]:
    """Rewrite non-canonical reaction types. Returns scanned/updated/unknown counts."""
    stats = {"scanned": 0, "updated": 0, "unknown": 0}
    offset = 0

    try:
        while True:
            batch = (
                db.query(Reaction)
                .order_by(Reaction.id)
                .offset(offset)
                .limit(batch_size)
                .all()
            )
            if not batch:
                break

            for reaction in batch:
                stats["scanned"] += 1
                canonical = normalize_reaction_type(reaction.reaction_type)
                if canonical is None:
                    stats["unknown"] += 1
                    logger.warning(f"Reaction {reaction.id} has unknown type {reaction.reaction_type!r}, left as is")
                elif reaction.reaction_type != canonical:
                    logger.info(f"Reaction {reaction.id}: {reaction.reaction_type} -> {canonical}")
                    reaction.reaction_type = canonical
                    stats["updated"] += 1

            offset += batch_size

        if dry_run:
            db.rollback()
        else:
            db.commit()
    except Exception:
        db.rollback()
        raise

    return stats
