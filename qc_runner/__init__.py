"""Host framework for the balenaFin QC station"""
