# arab_insights/messages/summary_messages.py

SUMMARY_SUCCESS = "Summary generated successfully."

SUMMARY_NO_TEXT = "Provide either text or analysis_id to summarise."
SUMMARY_NOT_CONFIGURED = "Summary inference endpoint or token is not configured."
SUMMARY_UPSTREAM_FAILED = "The summary model endpoint did not return a usable answer."
