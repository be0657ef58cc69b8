"""Project layer — the consumer side: hauk.config.json, hauk.lock.json and init scaffolding."""
