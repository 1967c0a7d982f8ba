# Copyright (c) 2025 Damien Boisvert (AlphaGameDeveloper)
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""
Locust load testing configuration for the Support Tools website
Tests page serving (memory and filesystem modes) under load
"""

from locust import HttpUser, task, between
import random

# Pages every Hugo build of the blog produces
SITE_PAGES = [
    "/",
    "/about/",
    "/post/",
    "/categories/kubernetes/",
    "/categories/ubuntu/",
    "/training/",
    "/index.xml",
    "/sitemap.xml",
]

class ReaderUser(HttpUser):
    """
    Simulates a reader: lands on the home page, follows a few posts
    Most browsers send Accept-Encoding: gzip, so the compressed path is the hot one
    """
    wait_time = between(1, 5)

    def on_start(self):
        self.post_urls = []

    @task(10)
    def browse_page(self):
        """Fetch one of the section pages"""
        self.client.get(random.choice(SITE_PAGES), headers={"Accept-Encoding": "gzip"}, name="site_page")

    @task(5)
    def read_post(self):
        """Fetch a post from the published index if the build exported one"""
        if not self.post_urls:
            response = self.client.get("/posts.json", name="posts_index")
            if response.status_code == 200:
                try:
                    self.post_urls = [p["url"] for p in response.json()]
                except (ValueError, KeyError, TypeError):
                    self.post_urls = []
            return
        self.client.get(random.choice(self.post_urls), headers={"Accept-Encoding": "gzip"}, name="post")

    @task(1)
    def revalidate(self):
        """Conditional request, as a browser with a warm cache would send"""
        response = self.client.get("/", name="home")
        etag = response.headers.get("ETag")
        if etag:
            self.client.get("/", headers={"If-None-Match": etag}, name="home_revalidate")

    @task(1)
    def missing_page(self):
        """Stale links from search engines"""
        with self.client.get("/post/this-post-does-not-exist/", name="missing_page", catch_response=True) as response:
            if response.status_code == 404:
                response.success()

class SpamHealthCheckUser(HttpUser):
    """
    Simulates kubelet probes and Prometheus scrapes hammering the metrics port
    """
    wait_time = between(1, 5)

    @task(10)
    def healthz(self):
        self.client.get("/healthz", name="healthz")

    @task(1)
    def metrics(self):
        self.client.get("/metrics", name="metrics")

"""
Usage Examples:

1. Readers against the site port:
   locust -f locustfile.py --users 50 --spawn-rate 5 --host http://localhost:8080 ReaderUser

2. Probes against the metrics port:
   locust -f locustfile.py --users 10 --spawn-rate 5 --host http://localhost:9090 SpamHealthCheckUser

3. Web UI (recommended):
   locust -f locustfile.py --host http://localhost:8080
   Then open http://localhost:8089

Compare USE_MEMORY=true against USE_MEMORY=false runs to size the pods.
"""
