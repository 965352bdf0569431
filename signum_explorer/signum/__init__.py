"""Signum node API: data models, a failover node pool with caches, and account queries."""