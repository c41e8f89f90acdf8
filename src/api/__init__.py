"""API: camada de borda HTTP.

Valida requests (pydantic), delega para ai/services e codifica a saída
(JSON ou SSE). Não contém regras de formulário nem chamadas ao modelo.
"""
