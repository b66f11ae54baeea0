from carlisting.parsing.client_base import TextCompletionProvider
from carlisting.parsing.factory import ProviderFactory
from carlisting.parsing.parser import CarListingParser

__all__ = ["CarListingParser", "ProviderFactory", "TextCompletionProvider"]
