"""BrewAI: AI-suggested networking contacts for job postings."""

__version__ = "0.1.0"
