"""
Reading feature files and sequences, and the data models used to move feature records and genome models in and
out of FeatureCantor.
"""
