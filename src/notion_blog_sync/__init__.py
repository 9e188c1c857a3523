# ABOUTME: Bidirectional sync between a Markdown blog and a Notion data source.
# ABOUTME: 'push' creates Notion pages from posts, 'pull' writes Notion pages back as posts.

__version__ = "0.1.0"
