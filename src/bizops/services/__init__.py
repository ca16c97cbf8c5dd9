"""Onboarding services: engine, persistence, auto-launch and provider."""
