class LoadError(Exception):
    """O dataset não pôde ser aberto na inicialização. Único erro fatal do serviço."""

    def __init__(self, source, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot open dataset {source}: {reason}")
