"""FastAPI application exposing the patient, login and clinical endpoints."""
