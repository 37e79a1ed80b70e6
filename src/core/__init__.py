"""Core: settings, domain, contracts and services. No terminal output here."""
