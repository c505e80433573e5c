"""Kubernetes API wrapper."""

from __future__ import annotations

from kubernetes import client, config

REQUEST_TIMEOUT = 30


class K8sClient:
    """Lazily configured access to custom resources (kubeconfig first, then in-cluster)."""

    def __init__(self, context: str | None = None):
        self.context = context
        self._custom: client.CustomObjectsApi | None = None

    def _api_client(self) -> client.ApiClient:
        try:
            cfg = client.Configuration()
            config.load_kube_config(context=self.context, client_configuration=cfg)
            # Prevent indefinite hangs on unreachable clusters
            cfg.retries = 1
            return client.ApiClient(configuration=cfg)
        except config.ConfigException:
            config.load_incluster_config()
            return client.ApiClient()

    @property
    def custom(self) -> client.CustomObjectsApi:
        if self._custom is None:
            self._custom = client.CustomObjectsApi(api_client=self._api_client())
        return self._custom

    def list_custom_resources(
        self,
        group: str,
        version: str,
        plural: str,
        namespace: str | None = None,
    ) -> list[dict]:
        """Items of one custom resource kind, cluster-wide unless *namespace* is given."""
        if namespace:
            result = self.custom.list_namespaced_custom_object(
                group, version, namespace, plural, _request_timeout=REQUEST_TIMEOUT,
            )
        else:
            result = self.custom.list_cluster_custom_object(
                group, version, plural, _request_timeout=REQUEST_TIMEOUT,
            )
        return result.get("items", [])
