"""Supporting utilities for ghostcal."""
