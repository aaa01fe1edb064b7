"""Al-Tartil reading planner: a day-by-day schedule for a 604-page recitation."""

__version__ = "0.1.0"
