"""Core building blocks for wordgate: resilience, providers, transport, observability."""
