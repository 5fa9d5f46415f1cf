"""App — orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de domínio (eventos, MessageLog, configuração)
- use_cases/: casos de uso (ingestão, processador, envio manual)
- services/: serviços de aplicação puros (renderização de template)
- infra/: implementações concretas de IO (stores, locks)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas em log estruturado

Padrão: app executa; api adapta; config parametriza; utils apoia.
"""
