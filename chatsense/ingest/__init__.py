"""Ingest - validation and text extraction for exported chat files"""
