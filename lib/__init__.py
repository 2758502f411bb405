# =============================================================================
# lib/ - Shared Helpers
# =============================================================================
# - utils.py: timestamps and review id generation
# =============================================================================
