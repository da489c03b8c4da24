"""Infrastructure: persistence, storage, messaging and service implementations."""
