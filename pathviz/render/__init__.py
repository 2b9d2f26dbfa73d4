from pathviz.render.target import SVG_NAMESPACE, ElementTreeTarget, RenderTarget

__all__ = ["ElementTreeTarget", "RenderTarget", "SVG_NAMESPACE"]
