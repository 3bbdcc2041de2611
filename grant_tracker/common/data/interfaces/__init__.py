import grant_tracker.common.data.interfaces.clients as clients
import grant_tracker.common.data.interfaces.grants as grants

__all__ = ["clients", "grants"]
