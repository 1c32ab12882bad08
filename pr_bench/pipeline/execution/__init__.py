"""Planning, execution and receipts for a single benchmark run."""
