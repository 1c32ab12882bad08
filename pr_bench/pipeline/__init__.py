"""PR benchmark pipeline: plan, run and record PR-vs-target-branch benchmark comparisons."""
