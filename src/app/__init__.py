"""App: o coração do relay (orquestração, casos de uso e infraestrutura).

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: contrato do item de submissão
- use_cases/: submissão, ingestão de postback e entrega
- services/: correlação, contabilização e normalização de itens
- infra/: implementações concretas de IO (stores, HTTP, API de tarefas)
- protocols/: contratos/interfaces e modelos compartilhados
- policies/: políticas de admissão (rate limit, credenciais)
- observability/: request_id e métricas via logs estruturados

Padrão: app executa; api adapta; config configura; utils apoia.
"""
