"""Sync stickers from a Notion database to stickertrade.ca."""
