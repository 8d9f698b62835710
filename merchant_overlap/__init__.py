"""
Sitemap domain extraction and catalog overlap analysis.
"""
