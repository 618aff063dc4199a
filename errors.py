class AnalyzerError(Exception):
    """Base error for the resume analyzer. `user_message` is safe to show in the UI."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str = "", user_message: str | None = None):
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


class ConfigurationError(AnalyzerError):
    user_message = "Please set your Gemini API key (GEMINI_API_KEY) in the .env file."


class InputValidationError(AnalyzerError):
    user_message = "Please provide both resume and job description."


class DecodeError(AnalyzerError):
    user_message = "Error processing file. Please try again or paste the text manually."


class DecoderUnavailableError(AnalyzerError):
    user_message = "PDF support is not available. Please paste the resume text manually."


class NetworkError(AnalyzerError):
    user_message = "Analysis failed. Please check your API key and try again."


class ResponseFormatError(AnalyzerError):
    user_message = "Analysis failed. Please check your API key and try again."


class AnalysisSchemaError(AnalyzerError):
    """The model answered with JSON that does not match the analysis schema."""

    user_message = "The model returned an incomplete analysis. Please run the analysis again."
