"""Static GitHub API response fixtures."""
