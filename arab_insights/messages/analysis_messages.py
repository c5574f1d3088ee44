# arab_insights/messages/analysis_messages.py

# ✅ Positive
ANALYSIS_SUCCESS = "Text analysed successfully."
ANALYSIS_NOT_SAVED = "Text analysed, but the result could not be saved."
ANALYSES_FETCHED = "Analyses fetched successfully."
ANALYSIS_FETCHED = "Analysis fetched successfully."
STATS_FETCHED = "Analysis statistics computed successfully."
BATCH_COMPLETED = "Batch analysis completed."


# ❌ Errors
ANALYSIS_NOT_FOUND = "Analysis not found."
INFERENCE_NOT_CONFIGURED = "Sentiment inference endpoint or token is not configured."
INFERENCE_UPSTREAM_FAILED = "The sentiment model endpoint did not return a usable answer."
PERSISTENCE_FAILED = "Analysis result could not be saved."
NO_USABLE_CONTENT = "Article has no usable content to analyse."
BATCH_TOO_LARGE = "Too many articles requested for one batch."
BATCH_NO_ARTICLES = "No unanalysed articles found for this project."
