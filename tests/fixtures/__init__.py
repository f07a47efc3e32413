"""Test fixtures for the Rosetta client.

- server: a uvicorn-served stub that delays its answers on request
"""
