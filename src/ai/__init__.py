"""Módulo AI do assistente de inscrição.

Componentes:
1. rules/field_schema - valores permitidos e dependências entre campos
2. utils - extração de JSON da resposta e validação dos campos
3. tools - catálogo de hospedagem exposto ao agente
4. core - protocolo do runtime de agente (+ runtime mock)
5. services - orquestrador do assistente e relay de chat
"""
