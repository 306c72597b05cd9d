"""Core building blocks: environment, enums, exceptions, logging and config."""
