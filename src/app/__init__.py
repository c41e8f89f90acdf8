"""App: composition root, ciclo de vida e infraestrutura.

Subpastas:
- bootstrap/: inicialização, validação de settings e factory do runtime
- infra/: implementações concretas de IO (runtime OpenAI)
- observability/: correlation id para logs e responses

Padrão: app executa; api adapta; ai decide; utils apoia.
"""
