"""
Proxy Config Service

Writes the default nginx site for Artifactory when none exists.
"""

from pathlib import Path

from artdeploy.constants import (
    PROXY_BACKEND_URL,
    PROXY_CONFIG_DIR,
    PROXY_CONFIG_FILENAME,
)

NGINX_CONFIG = """\
## add ssl entries when https has been set in config
ssl_certificate      /etc/nginx/ssl/example.crt;
ssl_certificate_key  /etc/nginx/ssl/example.key;
ssl_session_cache shared:SSL:1m;
ssl_prefer_server_ciphers on;

## server configuration
server {
    listen 443 ssl;
    listen 80;

    server_name ~(?<repo>.+)\\.artifactory artifactory;

    if ($http_x_forwarded_proto = '') {
        set $http_x_forwarded_proto $scheme;
    }

    ## Application specific logs
    access_log /var/log/nginx/artifactory-access.log;
    error_log /var/log/nginx/artifactory-error.log;

    rewrite ^/$ /artifactory/webapp/ redirect;
    rewrite ^/artifactory/?(/webapp)?$ /artifactory/webapp/ redirect;
    rewrite ^/(v1|v2)/(.*) /artifactory/api/docker/$repo/$1/$2;

    chunked_transfer_encoding on;
    client_max_body_size 0;

    location /artifactory/ {
        proxy_read_timeout  900;
        proxy_pass_header   Server;
        proxy_cookie_path   ~*^/.* /;
        proxy_pass          %(backend)s;
        proxy_set_header    X-Artifactory-Override-Base-Url $http_x_forwarded_proto://$host:$server_port/artifactory;
        proxy_set_header    X-Forwarded-Port  $server_port;
        proxy_set_header    X-Forwarded-Proto $http_x_forwarded_proto;
        proxy_set_header    Host              $http_host;
        proxy_set_header    X-Forwarded-For   $proxy_add_x_forwarded_for;
    }
}
"""


def render_proxy_config(backend_url: str = PROXY_BACKEND_URL) -> str:
    return NGINX_CONFIG % {"backend": backend_url}


class ProxyConfigService:
    """Owns nginx/conf.d/artifactory.conf under the data directory."""

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir

    @property
    def config_path(self) -> Path:
        return self.data_dir.joinpath(*PROXY_CONFIG_DIR) / PROXY_CONFIG_FILENAME

    def ensure(self) -> bool:
        """
        Write the default config unless one is already there.

        Returns:
            True if the file was written
        """
        if self.config_path.exists():
            return False

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(render_proxy_config())
        return True
