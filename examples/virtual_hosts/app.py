"""Virtual hosts — one app serving several sites by host name.

``www.example.com`` gets the main site, ``<tenant>.example.com`` gets a
per-tenant router, anything else is sent to the main site.

Try (from this directory):
    PYTHONPATH=. perch request app:app GET http://acme.example.com/
"""

from perch import App, HostRouter, Request, Router, redirect

site = Router()
site.register("/", "GET", lambda request: "Main site")
site.register("/old-pricing", "GET", redirect("pricing", permanent=True))
site.register("/pricing", "GET", lambda request: "Pricing")

tenants = Router()


@tenants.route("/")
def tenant_home(request: Request):
    return f"Welcome to {request.params['tenant']}"


@tenants.route("/files/*")
def tenant_files(request: Request):
    return f"{request.params['tenant']} file {request.path}"


hosts = HostRouter(default_handler=site)
hosts.register("www.example.com", site)
hosts.register("<tenant>.example.com", tenants)

app = App(hosts)

if __name__ == "__main__":
    app.run()
