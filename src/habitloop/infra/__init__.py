"""Infrastructure: database engine and concrete repositories."""
