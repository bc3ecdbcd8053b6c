"""Tab views and search over RFP collections."""

from rfp_desk.query.engine import QueryEngine, Tab, by_tab, is_completed, search
from rfp_desk.query.seeds import seed_records

__all__ = ["QueryEngine", "Tab", "by_tab", "is_completed", "search", "seed_records"]
