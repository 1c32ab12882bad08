"""Small subprocess/git/filesystem helpers shared by the pipeline."""
