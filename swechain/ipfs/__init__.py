"""Coding trajectory records: types, keeper, message and query servers, and app module."""