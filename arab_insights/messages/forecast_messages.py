# arab_insights/messages/forecast_messages.py

# ✅ Positive
FORECAST_SUCCESS = "Forecast generated successfully."
FORECASTS_FETCHED = "Forecasts fetched successfully."


# ❌ Errors
FORECAST_NOT_ENOUGH_DATA = (
    "Not enough historical data for forecasting (minimum 5 analyses required)."
)
FORECAST_NOT_SAVED = "Forecast could not be saved."
