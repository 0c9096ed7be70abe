"""Export incomplete Backlog tasks with their parent/child hierarchy."""
