"""Batch-run services: orchestration, progress, summary, sink payload, age report."""
