"""
Term Resolver Custom Exceptions
"""


class TermResolverError(Exception):
    """Base exception for the term resolver"""
    pass


class ScopeAdminError(TermResolverError):
    """The Scope Administration File could not be loaded"""
    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"SAF {path}: {message}")


class TerminologyNotFoundError(TermResolverError):
    """No terminology (MRG) files were found in the glossary directory"""
    def __init__(self, glossary_dir, pattern: str):
        self.glossary_dir = glossary_dir
        self.pattern = pattern
        super().__init__(f"No terminology files matching '{pattern}' found in {glossary_dir}")


class TerminologyFileError(TermResolverError):
    """A terminology (MRG) file could not be read or parsed"""
    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"MRG {path}: {message}")


class GlossaryNotInitializedError(TermResolverError):
    """Lookup attempted before the runtime glossary was built"""
    pass


class GrammarError(TermResolverError):
    """Invalid custom term reference pattern"""
    pass


class TemplateConfigError(TermResolverError):
    """Invalid custom render template"""
    pass


class ConfigurationError(TermResolverError):
    """Missing or unreadable tool configuration"""
    pass
