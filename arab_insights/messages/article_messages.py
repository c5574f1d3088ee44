# arab_insights/messages/article_messages.py

ARTICLES_STORED = "Articles stored successfully."
ARTICLES_FETCHED = "Articles fetched successfully."
