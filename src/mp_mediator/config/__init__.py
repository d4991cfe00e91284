"""Configuration – env/dotenv-backed pipeline settings."""
