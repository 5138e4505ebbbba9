"""Playbook API: pickup lines with a relational source of truth and an Elasticsearch projection."""
