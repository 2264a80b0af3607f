"""Playwright browser helpers: profile factory, navigation, product page."""
