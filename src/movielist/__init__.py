"""Movie List -- serve movies looked up concurrently from OMDb.

Core modules:
    config       -- Service configuration via pydantic-settings (API_KEY required).
                    Built once at startup and passed explicitly to the client.
    cli          -- Click CLI entry point (serve, fetch)
    server       -- FastAPI facade: /api/ liveness and /api/movies
    service      -- Load titles, run the fan-out, log the batch outcome
    fanout       -- Bounded fan-out/fan-in aggregator and PermitPool
    title_source -- Newline-delimited title list loader
    models       -- MovieRecord, AggregateResult, lookup enums
    errors       -- Exception hierarchy (config, title source, per-title lookup)

Subpackages:
    api -- External API clients (OMDb lookup and response classification)
"""
