"""Format-independent building blocks: model, metadata, status, durations, rollup."""
