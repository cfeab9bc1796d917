from .remediator import RewritePlan, plan_rewrite, remediate_dockerfile, rewrite_dockerfile_text

__all__ = ["RewritePlan", "plan_rewrite", "remediate_dockerfile", "rewrite_dockerfile_text"]
