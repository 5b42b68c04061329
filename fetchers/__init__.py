"""Hot-list scraping, heat parsing, keyword categorization and scoring."""
