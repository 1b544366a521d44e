"""Numerical back end: statistics, risk estimators and input modelling."""
