"""CLI interface for reportit application."""
