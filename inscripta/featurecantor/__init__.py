"""
FeatureCantor builds a chromosome / gene / transcript / exon / CDS model out of GenBank and EMBL style feature
tables, reconstructing the gene hierarchy that those formats only describe loosely.
"""
__version__ = "0.1.0"
