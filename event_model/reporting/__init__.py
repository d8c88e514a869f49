from .metrics import demographic_breakdown, summarize, yearly_summary

__all__ = ["demographic_breakdown", "summarize", "yearly_summary"]
