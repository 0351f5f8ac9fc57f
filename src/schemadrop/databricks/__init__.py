"""Databricks connectivity for executing drop scripts."""
