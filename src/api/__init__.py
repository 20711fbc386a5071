"""API: camada de borda HTTP.

Responsabilidades:
- Receber submissões de chamadores e postbacks da API externa
- Extrair credencial, chave de cliente e body bruto
- Mapear erros do relay para respostas HTTP

Subpastas:
- connectors/: extração de dados da requisição
- routes/: endpoints HTTP (tarefas, postback, health)

NÃO PODE conter: policies, persistência, orquestração de use cases.
"""
